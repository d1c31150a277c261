"""``attention_dump.json`` backend: one JSON document holding every file's metadata."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from attention_editor.core.errors import MalformedDataError, MetadataReadError, MetadataWriteError
from attention_editor.core.paths import FolderRoot
from attention_editor.core.ports.metadata import BackendRead, BackendSnapshot
from attention_editor.models import DumpFileEntry, MetadataUpdate
from attention_editor.storage.atomic import write_text_atomic

DUMP_FILE_NAME = "attention_dump.json"
DUMP_VERSION = "1.0"


def _entry_document(update: MetadataUpdate) -> dict[str, Any]:
    return {
        "attributes": dict(update.attributes),
        "priorities": dict(update.priorities),
        "facets": list(update.facets),
    }


def new_dump_document(relative_path: str, update: MetadataUpdate) -> dict[str, Any]:
    return {
        "version": DUMP_VERSION,
        "created_at": datetime.now().astimezone().isoformat(timespec="seconds"),
        "files": {relative_path: _entry_document(update)},
    }


class JsonDumpBackend:
    source = "dump"

    def __init__(self, root: FolderRoot) -> None:
        self._path = root.join(DUMP_FILE_NAME)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Any:
        try:
            content = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDataError(f"{self._path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise MetadataReadError(f"Cannot read {self._path}: {exc}") from exc
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise MalformedDataError(f"Failed to parse {self._path}: {exc}") from exc

    def read_entry(self, relative_path: str) -> BackendRead:
        try:
            data = self.load()
        except (MalformedDataError, MetadataReadError) as exc:
            return BackendRead(issue=exc)

        if not isinstance(data, dict) or not isinstance(data.get("files"), dict):
            return BackendRead()
        raw_entry = data["files"].get(relative_path)
        if not isinstance(raw_entry, dict):
            return BackendRead()

        try:
            entry = DumpFileEntry(
                attributes=raw_entry.get("attributes") or {},
                priorities=raw_entry.get("priorities") or {},
                facets=raw_entry.get("facets") or [],
            )
        except ValidationError as exc:
            return BackendRead(issue=MalformedDataError(f"Invalid entry for {relative_path!r} in {self._path}: {exc}"))
        return BackendRead(entry=entry)

    def read_snapshot(self) -> BackendSnapshot:
        try:
            return BackendSnapshot(data=self.load())
        except (MalformedDataError, MetadataReadError) as exc:
            return BackendSnapshot(issue=exc)

    def write_entry(self, relative_path: str, update: MetadataUpdate) -> None:
        try:
            data = self.load()
        except (MalformedDataError, MetadataReadError) as exc:
            raise MetadataWriteError(f"Refusing to update {self._path}: {exc}") from exc

        if not isinstance(data, dict):
            raise MetadataWriteError(f"Refusing to update {self._path}: top level is not an object")
        files = data.setdefault("files", {})
        if not isinstance(files, dict):
            raise MetadataWriteError(f"Refusing to update {self._path}: 'files' is not an object")

        files[relative_path] = _entry_document(update)
        self.write_document(data)

    def create(self, relative_path: str, update: MetadataUpdate) -> None:
        self.write_document(new_dump_document(relative_path, update))

    def write_document(self, data: Any) -> None:
        try:
            text = json.dumps(data, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise MetadataWriteError(f"Metadata for {self._path} is not JSON serialisable: {exc}") from exc
        try:
            write_text_atomic(self._path, text + "\n")
        except OSError as exc:
            raise MetadataWriteError(f"Failed to write {self._path}: {exc}") from exc
