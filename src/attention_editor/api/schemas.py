from __future__ import annotations

from pydantic import BaseModel, Field

from attention_editor.models import AllMetadata, FileMetadata, FolderProfile, MetadataUpdate, TreeNode


class HealthResponse(BaseModel):
    status: str = "ok"


class AnalyzeRequest(BaseModel):
    folder_path: str = ""


class AnalyzeResponse(BaseModel):
    folder_path: str
    analysis: FolderProfile


class TreeResponse(BaseModel):
    tree: TreeNode | None


class UpdateFileRequest(BaseModel):
    file_path: str = ""
    content: str = ""


class FileMetadataResponse(BaseModel):
    metadata: FileMetadata


class UpdateMetadataRequest(BaseModel):
    file_path: str = ""
    metadata: MetadataUpdate = Field(default_factory=MetadataUpdate)


class UpdateMetadataResponse(BaseModel):
    success: bool
    message: str


class AllMetadataResponse(BaseModel):
    metadata: AllMetadata
