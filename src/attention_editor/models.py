from typing import Any, Literal

from pydantic import BaseModel, Field

NodeType = Literal["file", "directory"]


class TreeNode(BaseModel):
    name: str
    path: str
    relative_path: str
    type: NodeType
    children: list["TreeNode"] = Field(default_factory=list)


TreeNode.model_rebuild()  # necessary for recursive types


class FileMetadata(BaseModel):
    file_path: str
    has_metadata: bool = False
    attributes: dict[str, Any] = Field(default_factory=dict)
    priorities: dict[str, Any] = Field(default_factory=dict)
    facets: list[Any] = Field(default_factory=list)


class MetadataUpdate(BaseModel):
    """Metadata submitted for a single file."""

    attributes: dict[str, Any] = Field(default_factory=dict)
    priorities: dict[str, Any] = Field(default_factory=dict)
    facets: list[Any] = Field(default_factory=list)


class DumpFileEntry(BaseModel):
    attributes: dict[str, Any] = Field(default_factory=dict)
    priorities: dict[str, Any] = Field(default_factory=dict)
    facets: list[Any] = Field(default_factory=list)


class AllMetadata(BaseModel):
    has_metadata: bool = False
    source: Literal["dump", "as-directory"] | None = None
    data: Any = Field(default_factory=dict)


class GitProfile(BaseModel):
    has_git: bool = False
    has_branches: bool = False
    has_commits: bool = False
    branches: list[str] = Field(default_factory=list)
    current_branch: str | None = None
    commit_count: int = 0


class RubyProfile(BaseModel):
    is_gem: bool = False
    is_rails_app: bool = False
    gemfile_exists: bool = False
    gemspec_exists: bool = False


class TypeScriptProfile(BaseModel):
    has_typescript: bool = False
    tsconfig_exists: bool = False


class JavaScriptProfile(BaseModel):
    has_javascript: bool = False
    package_json_exists: bool = False
    node_modules_exists: bool = False


class RustProfile(BaseModel):
    has_rust: bool = False
    cargo_toml_exists: bool = False


class FrameworkProfile(BaseModel):
    ruby: RubyProfile = Field(default_factory=RubyProfile)
    typescript: TypeScriptProfile = Field(default_factory=TypeScriptProfile)
    javascript: JavaScriptProfile = Field(default_factory=JavaScriptProfile)
    rust: RustProfile = Field(default_factory=RustProfile)


class MetadataProfile(BaseModel):
    has_metadata: bool = False
    has_metadata_dump: bool = False
    as_directory_path: str | None = None
    dump_file_path: str | None = None


class FolderProfile(BaseModel):
    git_profile: GitProfile
    framework_profile: FrameworkProfile
    metadata_profile: MetadataProfile


class FileContent(BaseModel):
    file_path: str
    content: str
    size: int
    modified_at: str


class FileUpdateResult(BaseModel):
    success: bool
    message: str
    modified_at: str | None = None
