"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File system side effects used by cleanup.
Deletion is permanent: files are removed, not moved to a trash folder.
"""
import os
from dupsweep.core.errors import DeletionError


class FileService:
    """
    File removal with errors translated into DeletionError.
    """

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Permanently removes a single regular file."""
        if os.path.isdir(file_path) and not os.path.islink(file_path):
            raise DeletionError(f"Refusing to delete a directory: {file_path}")

        try:
            os.remove(file_path)
        except FileNotFoundError as e:
            raise DeletionError(f"File not found: {file_path}") from e
        except OSError as e:
            raise DeletionError(f"Failed to delete {file_path}: {e.strerror or e}") from e
