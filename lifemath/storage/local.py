"""
Local filesystem storage service implementation.

Reads calculator configuration files from a base directory on the local
filesystem.
"""

from pathlib import Path

from .base import (
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageService,
)


class LocalStorageService(StorageService):
    """Local filesystem storage rooted at a base directory."""

    def __init__(self, base_path: str = "."):
        """
        Initialize the local storage service.

        Args:
            base_path: Base directory that relative paths are resolved against
        """
        self.base_path = Path(base_path)

    def _get_file_path(self, file_path: str) -> Path:
        """
        Get the full local path for a storage path.

        Absolute paths are used as given; relative paths are resolved against
        the base path without climbing above it.
        """
        if Path(file_path).is_absolute():
            return Path(file_path)

        safe_path = file_path.replace("\\", "/")

        sanitized_parts: list[str] = []
        for part in safe_path.split("/"):
            if part == "..":
                if sanitized_parts:
                    sanitized_parts.pop()
            elif part and part != ".":
                sanitized_parts.append(part)

        return self.base_path.joinpath(*sanitized_parts)

    def retrieve_file(self, file_path: str) -> bytes:
        """
        Retrieve a file from the local filesystem.

        Raises:
            StorageNotFoundError: If the file is not found
            StorageError: If the file cannot be retrieved
        """
        try:
            local_path = self._get_file_path(file_path)

            if not local_path.is_file():
                raise StorageNotFoundError(f"File not found: {file_path}")

            with open(local_path, "rb") as f:
                return f.read()

        except PermissionError as e:
            raise StoragePermissionError(
                f"Permission denied retrieving file {file_path}: {e}"
            )
        except OSError as e:
            raise StorageError(f"Failed to retrieve file {file_path}: {e}")

    def file_exists(self, file_path: str) -> bool:
        """Check if a file exists in the local filesystem."""
        return self._get_file_path(file_path).is_file()
