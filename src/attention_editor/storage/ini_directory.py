"""``.as`` directory backend: ``Attributes.ini`` and ``Priorities.ini`` keyed by file section."""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from attention_editor.core import ini
from attention_editor.core.errors import FolderError, MalformedDataError, MetadataReadError, MetadataWriteError
from attention_editor.core.paths import FolderRoot
from attention_editor.core.ports.metadata import BackendRead, BackendSnapshot
from attention_editor.models import DumpFileEntry, MetadataUpdate
from attention_editor.storage.atomic import write_text_atomic

AS_DIRECTORY_NAME = ".as"
ATTRIBUTES_FILE_NAME = "Attributes.ini"
PRIORITIES_FILE_NAME = "Priorities.ini"
SECTION_PREFIX = "File:"


def section_name_for(relative_path: str) -> str:
    """Section holding a file's entries.

    Sections are keyed by base name only, so ``a/x.rb`` and ``b/x.rb`` share one
    section. Existing ``.as`` directories rely on this layout.
    """
    return f"{SECTION_PREFIX}{posixpath.basename(relative_path)}"


class IniDirectoryBackend:
    source = "as-directory"

    def __init__(self, root: FolderRoot) -> None:
        self._directory = root.join(AS_DIRECTORY_NAME)

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def attributes_path(self) -> Path:
        return self._directory / ATTRIBUTES_FILE_NAME

    @property
    def priorities_path(self) -> Path:
        return self._directory / PRIORITIES_FILE_NAME

    def exists(self) -> bool:
        return self._directory.is_dir()

    def load(self, path: Path) -> ini.IniSections:
        if not path.exists():
            return {}
        try:
            return ini.parse(path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise MalformedDataError(f"{path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise MetadataReadError(f"Cannot read {path}: {exc}") from exc

    def read_entry(self, relative_path: str) -> BackendRead:
        section = section_name_for(relative_path)
        found = False
        values: dict[str, dict[str, str]] = {"attributes": {}, "priorities": {}}
        issue: FolderError | None = None

        for field, path in (("attributes", self.attributes_path), ("priorities", self.priorities_path)):
            try:
                sections = self.load(path)
            except (MalformedDataError, MetadataReadError) as exc:
                issue = issue or exc
                continue
            if section in sections:
                found = True
                values[field] = sections[section]

        if not found:
            return BackendRead(issue=issue)
        return BackendRead(entry=DumpFileEntry(**values), issue=issue)

    def read_snapshot(self) -> BackendSnapshot:
        data: dict[str, ini.IniSections] = {"attributes": {}, "priorities": {}}
        issue: FolderError | None = None
        for field, path in (("attributes", self.attributes_path), ("priorities", self.priorities_path)):
            try:
                data[field] = self.load(path)
            except (MalformedDataError, MetadataReadError) as exc:
                issue = issue or exc
        return BackendSnapshot(data=data, issue=issue)

    def write_entry(self, relative_path: str, update: MetadataUpdate) -> None:
        section = section_name_for(relative_path)
        pending = [
            (path, _ini_entries(path, entries))
            for path, entries in ((self.attributes_path, update.attributes), (self.priorities_path, update.priorities))
            if entries
        ]
        for path, entries in pending:
            self._write_section(path, section, entries)

    def _write_section(self, path: Path, section: str, entries: dict[str, str]) -> None:
        try:
            sections = self.load(path)
        except (MalformedDataError, MetadataReadError) as exc:
            raise MetadataWriteError(f"Refusing to update {path}: {exc}") from exc

        sections[section] = entries
        try:
            write_text_atomic(path, ini.serialize(sections))
        except OSError as exc:
            raise MetadataWriteError(f"Failed to write {path}: {exc}") from exc


def _ini_entries(path: Path, entries: Mapping[str, Any]) -> dict[str, str]:
    """Render *entries* as INI lines, refusing any the parser would not read back."""
    rendered: dict[str, str] = {}
    for key, value in entries.items():
        name = _ini_value(key)
        text = _ini_value(value)
        if not name or "=" in name or name.startswith(ini.COMMENT_PREFIXES) or name.startswith("["):
            raise MetadataWriteError(f"Key {key!r} cannot be stored in {path}")
        if not text:
            raise MetadataWriteError(f"Empty value for {key!r} cannot be stored in {path}")
        rendered[name] = text
    return rendered


def _ini_value(value: Any) -> str:
    # A value spanning lines would be split into unrelated entries on the next parse.
    return " ".join(str(value).splitlines()).strip()
