from __future__ import annotations

import threading

from attention_editor.core.paths import FolderRoot


class FolderSelection:
    """The folder currently selected by the client; core calls receive it explicitly."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._root: FolderRoot | None = None

    @property
    def root(self) -> FolderRoot | None:
        with self._lock:
            return self._root

    def select(self, root: FolderRoot) -> None:
        with self._lock:
            self._root = root

    def clear(self) -> None:
        with self._lock:
            self._root = None


_selection: FolderSelection | None = None


def get_selection() -> FolderSelection:
    """Return the process-wide ``FolderSelection``, creating it lazily on first call."""
    global _selection  # noqa: PLW0603
    if _selection is None:
        _selection = FolderSelection()
    return _selection
