"""File operations, cleanup and duplicate group management services."""

from .file_service import FileService
from .cleanup_service import CleanupExecutorImpl
from .duplicate_service import DuplicateService

__all__ = ["FileService", "CleanupExecutorImpl", "DuplicateService"]
