class FolderError(Exception):
    """Base class for failures while inspecting or editing a folder."""


class NotFoundError(FolderError):
    """Raised when a folder or file does not exist."""


class AccessDeniedError(FolderError):
    """Raised when a path escapes the selected folder root."""


class MalformedDataError(FolderError, ValueError):
    """Raised when a metadata document cannot be parsed."""


class MetadataWriteError(FolderError):
    """Raised when a metadata document cannot be written."""


class VcsError(FolderError):
    """Raised when the version-control facts provider fails."""


class MetadataReadError(FolderError):
    """Raised when a metadata document exists but cannot be read."""


class InvalidPathError(FolderError, ValueError):
    """Raised when a path cannot be interpreted by the filesystem at all."""
