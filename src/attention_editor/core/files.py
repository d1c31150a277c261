import os
from datetime import datetime
from pathlib import Path

from attention_editor.core.errors import NotFoundError
from attention_editor.core.paths import FolderRoot, as_root
from attention_editor.models import FileContent, FileUpdateResult


def _modified_at(path: Path) -> str:
    return datetime.fromtimestamp(path.stat().st_mtime).astimezone().isoformat()


def _existing_file(folder: FolderRoot, file_path: str | os.PathLike[str]) -> Path:
    path = folder.contain(file_path)
    if not path.is_file():
        raise NotFoundError(f"File not found: {os.fspath(file_path)}")
    return path


def read_file_content(root: FolderRoot | str | os.PathLike[str], file_path: str | os.PathLike[str]) -> FileContent:
    """Read a text file inside *root*; undecodable bytes are replaced."""
    path = _existing_file(as_root(root), file_path)
    raw = path.read_bytes()
    return FileContent(
        file_path=os.fspath(file_path),
        content=raw.decode("utf-8", errors="replace"),
        size=len(raw),
        modified_at=_modified_at(path),
    )


def update_file_content(
    root: FolderRoot | str | os.PathLike[str],
    file_path: str | os.PathLike[str],
    content: str,
) -> FileUpdateResult:
    path = _existing_file(as_root(root), file_path)
    path.write_text(content, encoding="utf-8")
    return FileUpdateResult(success=True, message="File updated successfully", modified_at=_modified_at(path))
