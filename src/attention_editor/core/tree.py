"""Ordered folder tree construction."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from attention_editor.config import get_settings
from attention_editor.core.paths import ROOT_SENTINEL, FolderRoot, as_root
from attention_editor.models import TreeNode

logger = logging.getLogger(__name__)

# Pruned before descending; matched against the entry name and its relative path.
SKIPPED_DIRECTORIES: frozenset[str] = frozenset(
    {".git", "node_modules", "tmp", "log", "coverage", ".bundle", "vendor/bundle"}
)


@dataclass(frozen=True)
class TreeWarning:
    path: str
    relative_path: str
    reason: str
    detail: str = ""


@dataclass
class TreeScan:
    tree: TreeNode | None
    warnings: list[TreeWarning] = field(default_factory=list)


@dataclass(frozen=True)
class _Entry:
    path: Path
    name: str
    is_dir: bool
    follow: bool


def is_skipped(name: str, relative_path: str) -> bool:
    return name in SKIPPED_DIRECTORIES or relative_path in SKIPPED_DIRECTORIES


def _sort_key(entry: _Entry) -> tuple[int, str]:
    return (0 if entry.is_dir else 1, entry.name.casefold())


class _TreeBuilder:
    def __init__(self, root: FolderRoot, max_depth: int) -> None:
        self._root = root
        self._max_depth = max_depth
        self.warnings: list[TreeWarning] = []

    def build(self) -> TreeNode:
        root_path = self._root.path
        return self._directory_node(root_path, ROOT_SENTINEL, depth=0, ancestors=frozenset({root_path}))

    def _relative(self, path: Path) -> str:
        return path.relative_to(self._root.path).as_posix()

    def _warn(self, path: Path, relative_path: str, reason: str, detail: str = "") -> None:
        self.warnings.append(TreeWarning(str(path), relative_path, reason, detail))

    def _file_node(self, path: Path, relative_path: str) -> TreeNode:
        return TreeNode(name=path.name, path=str(path), relative_path=relative_path, type="file")

    def _directory_node(
        self,
        path: Path,
        relative_path: str,
        depth: int,
        ancestors: frozenset[Path],
    ) -> TreeNode:
        node = TreeNode(name=path.name, path=str(path), relative_path=relative_path, type="directory")

        if depth >= self._max_depth:
            self._warn(path, relative_path, "depth-limit", f"maximum depth {self._max_depth} reached")
            return node

        try:
            entries = self._list(path, ancestors)
        except PermissionError as exc:
            self._warn(path, relative_path, "permission-denied", str(exc))
            return node
        except OSError as exc:
            self._warn(path, relative_path, "unreadable", str(exc))
            return node

        for entry in sorted(entries, key=_sort_key):
            child_relative = self._relative(entry.path)
            if entry.is_dir and entry.follow:
                target = entry.path.resolve()
                node.children.append(
                    self._directory_node(entry.path, child_relative, depth + 1, ancestors | {target})
                )
            else:
                node.children.append(self._file_node(entry.path, child_relative))

        return node

    def _list(self, path: Path, ancestors: frozenset[Path]) -> list[_Entry]:
        entries: list[_Entry] = []
        with os.scandir(path) as it:
            for dir_entry in it:
                entry_path = Path(dir_entry.path)
                try:
                    is_dir = dir_entry.is_dir()
                except OSError:
                    is_dir = False

                if is_dir and is_skipped(dir_entry.name, self._relative(entry_path)):
                    continue

                follow = is_dir
                if is_dir and dir_entry.is_symlink():
                    follow = self._may_follow(entry_path, ancestors)
                    if not follow:
                        is_dir = False

                entries.append(_Entry(entry_path, dir_entry.name, is_dir, follow))
        return entries

    def _may_follow(self, link: Path, ancestors: frozenset[Path]) -> bool:
        target = link.resolve()
        relative_path = self._relative(link)
        if not self._root.contains(target):
            self._warn(link, relative_path, "symlink-outside-root", f"points to {target}")
            return False
        if target in ancestors:
            self._warn(link, relative_path, "symlink-cycle", f"points back to {target}")
            return False
        return True


def scan_tree(root: FolderRoot | str | os.PathLike[str], max_depth: int | None = None) -> TreeScan:
    """Build the folder tree and collect non-fatal traversal warnings."""
    folder = as_root(root)
    if not folder.is_dir():
        return TreeScan(tree=None)

    builder = _TreeBuilder(folder, max_depth if max_depth is not None else get_settings().max_tree_depth)
    tree = builder.build()
    return TreeScan(tree=tree, warnings=builder.warnings)


def build_tree(root: FolderRoot | str | os.PathLike[str], max_depth: int | None = None) -> TreeNode | None:
    """Return the ordered tree for *root*, or ``None`` if it is not a directory."""
    scan = scan_tree(root, max_depth=max_depth)
    for warning in scan.warnings:
        logger.warning("Skipped %s (%s): %s", warning.relative_path, warning.reason, warning.detail)
    return scan.tree
