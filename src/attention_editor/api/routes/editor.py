from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from attention_editor.api.dependencies import FolderSelection, get_selection
from attention_editor.api.errors import BadRequestError
from attention_editor.api.schemas import (
    AllMetadataResponse,
    AnalyzeRequest,
    AnalyzeResponse,
    FileMetadataResponse,
    TreeResponse,
    UpdateFileRequest,
    UpdateMetadataRequest,
    UpdateMetadataResponse,
)
from attention_editor.core.errors import NotFoundError
from attention_editor.core.files import read_file_content, update_file_content
from attention_editor.core.metadata import MetadataStore
from attention_editor.core.paths import FolderRoot
from attention_editor.core.profile import analyze_folder
from attention_editor.core.tree import build_tree
from attention_editor.models import FileContent, FileUpdateResult

router = APIRouter(prefix="/editor", tags=["editor"])


def _selected_root(selection: FolderSelection) -> FolderRoot:
    root = selection.root
    if root is None or not root.is_dir():
        raise BadRequestError("No valid folder selected")
    return root


def _require(value: str, name: str) -> str:
    if not value.strip():
        raise BadRequestError(f"{name} is required")
    return value


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(body: AnalyzeRequest, selection: FolderSelection = Depends(get_selection)) -> AnalyzeResponse:
    folder_path = _require(body.folder_path, "Folder path")
    root = FolderRoot(folder_path)
    if not root.is_dir():
        raise NotFoundError("Invalid folder path")

    selection.select(root)
    return AnalyzeResponse(folder_path=folder_path, analysis=analyze_folder(root))


@router.get("/tree", response_model=TreeResponse)
def folder_tree(
    folder_path: str | None = None,
    selection: FolderSelection = Depends(get_selection),
) -> TreeResponse:
    if selection.root is not None:
        root = _selected_root(selection)
    elif folder_path and FolderRoot(folder_path).is_dir():
        root = FolderRoot(folder_path)
    else:
        raise BadRequestError("No valid folder selected")
    return TreeResponse(tree=build_tree(root))


@router.get("/file-content", response_model=FileContent)
def file_content(file_path: str = "", selection: FolderSelection = Depends(get_selection)) -> FileContent:
    _require(file_path, "File path")
    return read_file_content(_selected_root(selection), file_path)


@router.post("/file-content", response_model=FileUpdateResult)
def update_file(body: UpdateFileRequest, selection: FolderSelection = Depends(get_selection)) -> FileUpdateResult:
    _require(body.file_path, "File path")
    return update_file_content(_selected_root(selection), body.file_path, body.content)


@router.get("/file-metadata", response_model=FileMetadataResponse)
def file_metadata(file_path: str = "", selection: FolderSelection = Depends(get_selection)) -> FileMetadataResponse:
    _require(file_path, "File path")
    store = MetadataStore(_selected_root(selection))
    return FileMetadataResponse(metadata=store.read_file_metadata(file_path))


@router.post("/file-metadata", response_model=UpdateMetadataResponse)
def update_metadata(
    body: UpdateMetadataRequest,
    selection: FolderSelection = Depends(get_selection),
) -> UpdateMetadataResponse | JSONResponse:
    _require(body.file_path, "File path")
    store = MetadataStore(_selected_root(selection))
    if not store.write_file_metadata(body.file_path, body.metadata):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to update metadata"},
        )
    return UpdateMetadataResponse(success=True, message="Metadata updated successfully")


@router.get("/metadata", response_model=AllMetadataResponse)
def all_metadata(selection: FolderSelection = Depends(get_selection)) -> AllMetadataResponse:
    store = MetadataStore(_selected_root(selection))
    return AllMetadataResponse(metadata=store.read_all_metadata())
