"""
Project storage interface.

Defines the abstract interface through which the pipeline reads and writes
files of the native project, so the filesystem side effects can be swapped
for an in-memory backend in tests.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod


class ProjectStorage(ABC):
    """Abstract storage for files under a native project root.

    Keys are root-relative POSIX paths such as ``app/build.gradle``.
    """

    @abstractmethod
    async def store_text(self, key: str, content: str) -> str:
        """Write text content, replacing any existing file, and return the key.

        Args:
            key: Root-relative path
            content: Full file content

        Returns:
            The final storage key
        """
        ...

    @abstractmethod
    async def load_text(self, key: str) -> str:
        """Load text content.

        Raises:
            FileNotFoundError: If the key is absent.
            StorageError: If the content cannot be decoded.
        """
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        ...

    @abstractmethod
    async def ensure_directory(self, key: str) -> None:
        """Create a directory and its parents; existing directories are fine."""
        ...

    @staticmethod
    def compute_hash(content: str) -> str:
        """Compute SHA-256 hash of text content."""
        return hashlib.sha256(content.encode("utf-8")).hexdigest()
