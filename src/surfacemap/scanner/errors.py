"""Scanner exceptions."""

from __future__ import annotations


class ScanError(Exception):
    """Base class for scan failures."""


class WorkspaceNotFoundError(ScanError):
    """The workspace root does not exist or is not a directory."""

    def __init__(self, directory: str) -> None:
        super().__init__(f"Workspace not found: {directory}")
        self.directory = directory


class FileReadError(ScanError):
    """Reading a file failed after it was opened."""

    def __init__(self, file_path: str, cause: OSError) -> None:
        super().__init__(f"Failed reading {file_path}: {cause}")
        self.file_path = file_path
        self.cause = cause
