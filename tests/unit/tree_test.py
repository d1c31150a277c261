"""Unit tests for the folder tree builder."""

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from attention_editor.core.tree import build_tree, scan_tree
from attention_editor.models import TreeNode
from tests.conftest import write_file


def _walk(node: TreeNode) -> Iterator[TreeNode]:
    yield node
    for child in node.children:
        yield from _walk(child)


def _names(node: TreeNode) -> list[str]:
    return [child.name for child in node.children]


class TestBuildTree:
    def test_returns_none_for_missing_folder(self, tmp_path: Path) -> None:
        assert build_tree(tmp_path / "missing") is None

    def test_returns_none_for_regular_file(self, tmp_path: Path) -> None:
        path = write_file(tmp_path, "file.txt", "x")
        assert build_tree(path) is None

    def test_root_node(self, folder: Path) -> None:
        write_file(folder, "file1.txt", "content")
        tree = build_tree(folder)

        assert tree is not None
        assert tree.type == "directory"
        assert tree.relative_path == "."
        assert tree.path == str(folder)
        assert tree.name == folder.name

    def test_directories_first_then_case_insensitive_names(self, folder: Path) -> None:
        write_file(folder, "b.txt")
        write_file(folder, "a.txt")
        (folder / "A").mkdir()

        tree = build_tree(folder)

        assert tree is not None
        assert _names(tree) == ["A", "a.txt", "b.txt"]
        assert [child.type for child in tree.children] == ["directory", "file", "file"]

    def test_mixed_case_ordering_within_groups(self, folder: Path) -> None:
        for name in ("zeta", "Alpha", "beta"):
            (folder / name).mkdir()
        for name in ("Readme.md", "app.py", "Zed.txt"):
            write_file(folder, name)

        tree = build_tree(folder)

        assert tree is not None
        assert _names(tree) == ["Alpha", "beta", "zeta", "app.py", "Readme.md", "Zed.txt"]

    def test_relative_paths_strip_root_prefix(self, folder: Path) -> None:
        write_file(folder, "file1.txt")
        write_file(folder, "subdir/file2.txt")
        write_file(folder, "subdir/deeper/file3.txt")

        tree = build_tree(folder)

        assert tree is not None
        for node in _walk(tree):
            if node is tree:
                continue
            assert node.path.startswith(str(folder) + os.sep)
            assert node.relative_path == Path(node.path).relative_to(folder).as_posix()
        subdir = tree.children[0]
        assert subdir.relative_path == "subdir"
        assert [c.relative_path for c in subdir.children] == ["subdir/deeper", "subdir/file2.txt"]

    def test_noise_directories_are_pruned(self, folder: Path) -> None:
        for name in (".git", "node_modules", "tmp", "log", "coverage", ".bundle"):
            write_file(folder, f"{name}/inner.txt")
        write_file(folder, "vendor/bundle/gem.rb")
        write_file(folder, "vendor/other.rb")
        write_file(folder, "src/main.rb")

        tree = build_tree(folder)

        assert tree is not None
        assert _names(tree) == ["src", "vendor"]
        vendor = tree.children[1]
        assert _names(vendor) == ["other.rb"]
        all_names = {node.name for node in _walk(tree)}
        assert ".git" not in all_names
        assert "node_modules" not in all_names

    def test_nested_noise_directories_are_pruned(self, folder: Path) -> None:
        write_file(folder, "web/node_modules/pkg/index.js")
        write_file(folder, "web/app.js")

        tree = build_tree(folder)

        assert tree is not None
        assert _names(tree.children[0]) == ["app.js"]

    def test_files_named_like_noise_directories_are_kept(self, folder: Path) -> None:
        write_file(folder, "log", "a file, not a directory")

        tree = build_tree(folder)

        assert tree is not None
        assert _names(tree) == ["log"]

    def test_empty_directory_has_no_children(self, folder: Path) -> None:
        (folder / "empty").mkdir()
        tree = build_tree(folder)
        assert tree is not None
        assert tree.children[0].children == []

    def test_serializes_with_original_keys(self, folder: Path) -> None:
        write_file(folder, "a.txt")
        tree = build_tree(folder)
        assert tree is not None
        child = tree.model_dump()["children"][0]
        assert set(child) == {"name", "path", "relative_path", "type", "children"}


class TestTraversalWarnings:
    def test_permission_error_degrades_to_childless_directory(
        self, folder: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_file(folder, "locked/secret.txt")
        write_file(folder, "open/visible.txt")
        locked = folder / "locked"
        real_scandir = os.scandir

        def _scandir(path: "os.PathLike[str] | str") -> "os._ScandirIterator[str]":
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", _scandir)

        scan = scan_tree(folder)

        assert scan.tree is not None
        locked_node, open_node = scan.tree.children
        assert locked_node.name == "locked"
        assert locked_node.children == []
        assert _names(open_node) == ["visible.txt"]
        assert [(w.relative_path, w.reason) for w in scan.warnings] == [("locked", "permission-denied")]

    def test_depth_limit(self, folder: Path) -> None:
        write_file(folder, "a/b/c/d.txt")

        scan = scan_tree(folder, max_depth=2)

        assert scan.tree is not None
        b = scan.tree.children[0].children[0]
        assert b.relative_path == "a/b"
        assert b.children == []
        assert [(w.relative_path, w.reason) for w in scan.warnings] == [("a/b", "depth-limit")]

    def test_symlink_cycle_becomes_file_leaf(self, folder: Path) -> None:
        write_file(folder, "pkg/module.py")
        (folder / "pkg" / "self").symlink_to(folder / "pkg", target_is_directory=True)

        scan = scan_tree(folder)

        assert scan.tree is not None
        pkg = scan.tree.children[0]
        assert [(c.name, c.type) for c in pkg.children] == [("module.py", "file"), ("self", "file")]
        assert [w.reason for w in scan.warnings] == ["symlink-cycle"]

    def test_symlink_outside_root_becomes_file_leaf(self, folder: Path, tmp_path: Path) -> None:
        outside = tmp_path / "outside"
        write_file(outside, "elsewhere.txt")
        (folder / "external").symlink_to(outside, target_is_directory=True)

        scan = scan_tree(folder)

        assert scan.tree is not None
        assert [(c.name, c.type, c.children) for c in scan.tree.children] == [("external", "file", [])]
        assert [w.reason for w in scan.warnings] == ["symlink-outside-root"]

    def test_symlink_inside_root_is_followed(self, folder: Path) -> None:
        write_file(folder, "shared/util.py")
        (folder / "alias").symlink_to(folder / "shared", target_is_directory=True)

        scan = scan_tree(folder)

        assert scan.tree is not None
        alias = scan.tree.children[0]
        assert (alias.name, alias.type) == ("alias", "directory")
        assert [c.relative_path for c in alias.children] == ["alias/util.py"]
        assert scan.warnings == []

    def test_build_tree_logs_warnings(self, folder: Path, caplog: pytest.LogCaptureFixture) -> None:
        write_file(folder, "a/b.txt")
        with caplog.at_level("WARNING"):
            build_tree(folder, max_depth=1)
        assert "depth-limit" in caplog.text
