"""Folder-root scoping.

Every path handed to the core is resolved and checked against the selected
folder root before any filesystem access happens.
"""

from __future__ import annotations

import os
from pathlib import Path

from attention_editor.core.errors import AccessDeniedError, InvalidPathError

ROOT_SENTINEL = "."


class FolderRoot:
    """A canonicalised folder root that scopes all path operations."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = _resolved(Path(path).expanduser())

    @property
    def path(self) -> Path:
        return self._path

    def __fspath__(self) -> str:
        return str(self._path)

    def __str__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        return f"FolderRoot({str(self._path)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FolderRoot):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def is_dir(self) -> bool:
        return self._path.is_dir()

    def contains(self, path: str | os.PathLike[str]) -> bool:
        candidate = self._resolve(path)
        return candidate == self._path or self._path in candidate.parents

    def contain(self, path: str | os.PathLike[str]) -> Path:
        """Resolve *path* and return it, or raise ``AccessDeniedError`` if it escapes the root."""
        candidate = self._resolve(path)
        if candidate != self._path and self._path not in candidate.parents:
            raise AccessDeniedError(f"Path {os.fspath(path)!r} is outside folder {str(self._path)!r}")
        return candidate

    def relative(self, path: str | os.PathLike[str]) -> str:
        """Return the POSIX relative path of *path* inside the root ("." for the root itself).

        Containment is checked on the resolved path. The returned key comes from
        the normalised path as written, matching the relative paths of the tree.
        """
        candidate = self.contain(path)
        lexical = Path(os.path.normpath(self._absolute(path)))
        if lexical == self._path or self._path in lexical.parents:
            candidate = lexical
        if candidate == self._path:
            return ROOT_SENTINEL
        return candidate.relative_to(self._path).as_posix()

    def join(self, *parts: str) -> Path:
        return self._path.joinpath(*parts)

    def _absolute(self, path: str | os.PathLike[str]) -> Path:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self._path / candidate
        return candidate

    def _resolve(self, path: str | os.PathLike[str]) -> Path:
        return _resolved(self._absolute(path))


def _resolved(path: Path) -> Path:
    if "\x00" in str(path):
        raise InvalidPathError(f"Invalid path {str(path)!r}: embedded null byte")
    try:
        return path.resolve()
    except ValueError as exc:
        raise InvalidPathError(f"Invalid path {str(path)!r}: {exc}") from exc


def as_root(root: FolderRoot | str | os.PathLike[str]) -> FolderRoot:
    return root if isinstance(root, FolderRoot) else FolderRoot(root)
