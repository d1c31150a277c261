from dataclasses import dataclass
from typing import Any, Protocol

from attention_editor.core.errors import FolderError
from attention_editor.models import DumpFileEntry, MetadataUpdate


@dataclass(frozen=True)
class BackendRead:
    entry: DumpFileEntry | None = None
    issue: FolderError | None = None


@dataclass(frozen=True)
class BackendSnapshot:
    data: Any = None
    issue: FolderError | None = None


class MetadataBackend(Protocol):
    source: str

    def exists(self) -> bool: ...

    def read_entry(self, relative_path: str) -> BackendRead: ...

    def read_snapshot(self) -> BackendSnapshot: ...

    def write_entry(self, relative_path: str, update: MetadataUpdate) -> None: ...
