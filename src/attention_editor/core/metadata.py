"""Per-file metadata persisted either as a JSON dump or as an ``.as`` INI directory.

The store picks a backend on every call by probing the disk:

* reads merge the dump first and the ``.as`` directory second, key by key;
* a per-file write goes to the dump if it exists, else to the ``.as``
  directory if it exists, else a new dump is created;
* a whole-folder write always replaces the dump.

There is no migration between the two formats.
"""

from __future__ import annotations

import logging
import os
import threading
import weakref
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from attention_editor.core.errors import MetadataWriteError
from attention_editor.core.paths import FolderRoot, as_root
from attention_editor.core.ports.metadata import MetadataBackend
from attention_editor.models import AllMetadata, FileMetadata, MetadataUpdate
from attention_editor.storage.dump import JsonDumpBackend
from attention_editor.storage.ini_directory import IniDirectoryBackend

logger = logging.getLogger(__name__)

_write_locks: weakref.WeakValueDictionary[Path, threading.Lock] = weakref.WeakValueDictionary()
_write_locks_guard = threading.Lock()


def _write_lock(root: FolderRoot) -> threading.Lock:
    with _write_locks_guard:
        lock = _write_locks.get(root.path)
        if lock is None:
            lock = threading.Lock()
            _write_locks[root.path] = lock
        return lock


class MetadataStore:
    def __init__(
        self,
        root: FolderRoot | str | os.PathLike[str],
        dump: JsonDumpBackend | None = None,
        ini_directory: IniDirectoryBackend | None = None,
    ) -> None:
        self.root = as_root(root)
        self.dump = dump or JsonDumpBackend(self.root)
        self.ini_directory = ini_directory or IniDirectoryBackend(self.root)

    def read_file_metadata(self, file_path: str | os.PathLike[str]) -> FileMetadata:
        relative_path = self.root.relative(file_path)
        metadata = FileMetadata(file_path=os.fspath(file_path))

        backends: tuple[MetadataBackend, ...] = (self.dump, self.ini_directory)
        for backend in backends:
            if not backend.exists():
                continue
            result = backend.read_entry(relative_path)
            if result.issue is not None:
                logger.warning("Ignoring unreadable %s metadata: %s", backend.source, result.issue)
            if result.entry is None:
                continue
            metadata.attributes.update(result.entry.attributes)
            metadata.priorities.update(result.entry.priorities)
            if result.entry.facets:
                metadata.facets = list(result.entry.facets)

        metadata.has_metadata = bool(metadata.attributes or metadata.priorities)
        return metadata

    def read_all_metadata(self) -> AllMetadata:
        if self.dump.exists():
            snapshot = self.dump.read_snapshot()
            if snapshot.issue is None:
                return AllMetadata(has_metadata=True, source="dump", data=snapshot.data)
            logger.warning("Ignoring unreadable metadata dump: %s", snapshot.issue)

        if self.ini_directory.exists():
            snapshot = self.ini_directory.read_snapshot()
            if snapshot.issue is not None:
                logger.warning("Ignoring unreadable .as metadata: %s", snapshot.issue)
            data = snapshot.data
            return AllMetadata(
                has_metadata=bool(data["attributes"] or data["priorities"]),
                source="as-directory",
                data=data,
            )

        return AllMetadata()

    def write_file_metadata(
        self,
        file_path: str | os.PathLike[str],
        metadata: MetadataUpdate | Mapping[str, Any],
    ) -> bool:
        relative_path = self.root.relative(file_path)
        try:
            update = metadata if isinstance(metadata, MetadataUpdate) else MetadataUpdate.model_validate(metadata)
        except ValidationError as exc:
            logger.error("Rejected metadata for %s: %s", relative_path, exc)
            return False

        with _write_lock(self.root):
            try:
                if self.dump.exists():
                    self.dump.write_entry(relative_path, update)
                elif self.ini_directory.exists():
                    self.ini_directory.write_entry(relative_path, update)
                else:
                    self.dump.create(relative_path, update)
            except MetadataWriteError as exc:
                logger.error("Failed to write metadata for %s: %s", relative_path, exc)
                return False
        return True

    def write_all_metadata(self, data: Any) -> bool:
        with _write_lock(self.root):
            try:
                self.dump.write_document(data)
            except MetadataWriteError as exc:
                logger.error("Failed to write metadata dump: %s", exc)
                return False
        return True


def read_file_metadata(root: FolderRoot | str | os.PathLike[str], file_path: str | os.PathLike[str]) -> FileMetadata:
    return MetadataStore(root).read_file_metadata(file_path)


def read_all_metadata(root: FolderRoot | str | os.PathLike[str]) -> AllMetadata:
    return MetadataStore(root).read_all_metadata()


def write_file_metadata(
    root: FolderRoot | str | os.PathLike[str],
    file_path: str | os.PathLike[str],
    metadata: MetadataUpdate | Mapping[str, Any],
) -> bool:
    return MetadataStore(root).write_file_metadata(file_path, metadata)


def write_all_metadata(root: FolderRoot | str | os.PathLike[str], data: Any) -> bool:
    return MetadataStore(root).write_all_metadata(data)
