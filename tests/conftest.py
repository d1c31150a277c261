"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from attention_editor.core.paths import FolderRoot

_TESTS_ROOT = Path(__file__).parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_TESTS_ROOT)
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def folder(tmp_path: Path) -> Path:
    """Return a resolved, empty folder to analyze."""
    root = tmp_path / "project"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def folder_root(folder: Path) -> FolderRoot:
    return FolderRoot(folder)


@pytest.fixture
def as_directory(folder: Path) -> Path:
    """Create an empty ``.as`` metadata directory inside ``folder``."""
    directory = folder / ".as"
    directory.mkdir()
    return directory


def write_file(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
