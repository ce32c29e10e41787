"""
Base storage service interface and exceptions.

Configuration documents are read through a storage service so the loader does
not depend on where calculator configuration files live.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict


class StorageError(Exception):
    """Base exception for storage-related errors."""


class StorageNotFoundError(StorageError):
    """Raised when a requested file is not found in storage."""


class StoragePermissionError(StorageError):
    """Raised when there are permission issues with storage operations."""


class StorageService(ABC):
    """
    Abstract base class for read-only storage services.

    Implementations retrieve raw file content by path; JSON decoding is shared.
    """

    @abstractmethod
    def retrieve_file(self, file_path: str) -> bytes:
        """
        Retrieve a file from the storage backend.

        Args:
            file_path: The path/key of the file to retrieve

        Returns:
            bytes: The file content

        Raises:
            StorageNotFoundError: If the file is not found
            StorageError: If the file cannot be retrieved
        """

    @abstractmethod
    def file_exists(self, file_path: str) -> bool:
        """
        Check if a file exists in the storage backend.

        Args:
            file_path: The path/key of the file to check

        Returns:
            bool: True if the file exists, False otherwise
        """

    def retrieve_json(self, file_path: str) -> Dict[str, Any]:
        """
        Retrieve and decode a JSON object.

        Raises:
            StorageNotFoundError: If the file is not found
            StorageError: If the file cannot be read or is not a JSON object
        """
        content = self.retrieve_file(file_path)
        try:
            document = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"File {file_path} is not valid JSON: {e}")

        if not isinstance(document, dict):
            raise StorageError(f"File {file_path} does not contain a JSON object")
        return document
