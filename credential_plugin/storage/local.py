"""
Local filesystem project storage.

Reads and writes files of a native project on the local disk.
"""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os

from ..core.exceptions import StorageError
from .interface import ProjectStorage


class LocalProjectStorage(ProjectStorage):
    """Local filesystem storage rooted at the native project directory."""

    def __init__(self, base_path: Path) -> None:
        """Initialize local storage.

        Args:
            base_path: Native project root; every key resolves beneath it
        """
        self.base_path = base_path.resolve()

    def _get_full_path(self, key: str) -> Path:
        """Get full filesystem path for a key."""
        full_path = (self.base_path / key.lstrip("/\\")).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StorageError(
                message="Key escapes the project root",
                key=key,
                operation="resolve",
                cause=e,
            ) from e
        return full_path

    async def store_text(self, key: str, content: str) -> str:
        """Write text content to the filesystem."""
        full_path = self._get_full_path(key)
        await aiofiles.os.makedirs(full_path.parent, exist_ok=True)

        # newline="" keeps the line endings of the content as-is
        async with aiofiles.open(full_path, "w", encoding="utf-8", newline="") as f:
            await f.write(content)

        return key

    async def load_text(self, key: str) -> str:
        """Load text content from the filesystem."""
        full_path = self._get_full_path(key)

        if not full_path.exists():
            raise FileNotFoundError(f"Key not found: {key}")

        try:
            async with aiofiles.open(full_path, "r", encoding="utf-8", newline="") as f:
                return await f.read()
        except UnicodeDecodeError as e:
            raise StorageError(
                message="File is not valid UTF-8 text",
                key=key,
                operation="load",
                cause=e,
            ) from e

    async def exists(self, key: str) -> bool:
        """Check if key exists on the filesystem."""
        return self._get_full_path(key).exists()

    async def ensure_directory(self, key: str) -> None:
        """Create a directory tree under the root."""
        await aiofiles.os.makedirs(self._get_full_path(key), exist_ok=True)
