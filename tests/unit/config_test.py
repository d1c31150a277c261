"""Unit tests for environment-driven settings."""

import pytest

from attention_editor.config import Settings, get_settings

_VARS = (
    "ATTENTION_EDITOR_GIT_BINARY",
    "ATTENTION_EDITOR_GIT_TIMEOUT",
    "ATTENTION_EDITOR_MAX_TREE_DEPTH",
    "ATTENTION_EDITOR_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    assert get_settings() == Settings()


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATTENTION_EDITOR_GIT_BINARY", "/usr/local/bin/git")
    monkeypatch.setenv("ATTENTION_EDITOR_GIT_TIMEOUT", "2.5")
    monkeypatch.setenv("ATTENTION_EDITOR_MAX_TREE_DEPTH", "8")
    monkeypatch.setenv("ATTENTION_EDITOR_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.git_binary == "/usr/local/bin/git"
    assert settings.git_timeout == 2.5
    assert settings.max_tree_depth == 8
    assert settings.log_level == "DEBUG"


def test_blank_value_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATTENTION_EDITOR_MAX_TREE_DEPTH", "  ")
    assert get_settings().max_tree_depth == Settings().max_tree_depth


@pytest.mark.parametrize("value", ["deep", "0", "-3", "1.5"])
def test_invalid_depth_is_rejected(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("ATTENTION_EDITOR_MAX_TREE_DEPTH", value)
    with pytest.raises(ValueError, match="ATTENTION_EDITOR_MAX_TREE_DEPTH"):
        get_settings()
