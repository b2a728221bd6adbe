"""
Local filesystem storage backend.

Provides a filesystem-based implementation of the storage interface,
suitable for development and single-machine deployments.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TypeVar

import aiofiles
import aiofiles.os
from pydantic import BaseModel

from ..core.exceptions import ValidationError
from .interface import StorageBackend

T = TypeVar("T", bound=BaseModel)


class LocalStorageBackend(StorageBackend):
    """Local filesystem storage backend."""

    def __init__(self, base_path: Path) -> None:
        """Initialize local storage.

        Args:
            base_path: Base directory for all storage operations
        """
        self.base_path = base_path.resolve()

    async def _ensure_parent(self, path: Path) -> None:
        if not path.parent.exists():
            await aiofiles.os.makedirs(path.parent, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Get full filesystem path for a key.

        Raises:
            ValidationError: The key is absolute or climbs out of the base directory.
        """
        clean_key = PurePosixPath(key.replace("\\", "/").lstrip("/"))
        full_path = (self.base_path / clean_key).resolve()

        if ".." in clean_key.parts or not full_path.is_relative_to(self.base_path):
            raise ValidationError(
                message=f"Storage key escapes the base directory: {key}",
                field_name="key",
                actual_value=key,
            )
        return full_path

    async def store_text(self, key: str, content: str) -> str:
        """Store text content to filesystem."""
        full_path = self._get_full_path(key)
        await self._ensure_parent(full_path)

        async with aiofiles.open(full_path, "w", encoding="utf-8") as f:
            await f.write(content)

        return key

    async def append_text(self, key: str, content: str) -> str:
        """Append text content to a file, creating it if needed."""
        full_path = self._get_full_path(key)
        await self._ensure_parent(full_path)

        async with aiofiles.open(full_path, "a", encoding="utf-8") as f:
            await f.write(content)

        return key

    async def store_model(self, key: str, model: BaseModel) -> str:
        """Store Pydantic model as JSON."""
        return await self.store_text(key, model.model_dump_json(indent=2))

    async def load_text(self, key: str) -> str:
        """Load text content from filesystem.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        full_path = self._get_full_path(key)

        if not full_path.exists():
            raise FileNotFoundError(f"Key not found: {key}")

        async with aiofiles.open(full_path, "r", encoding="utf-8") as f:
            return await f.read()

    async def load_model(self, key: str, model_type: type[T]) -> T:
        """Load Pydantic model from JSON file.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        json_content = await self.load_text(key)
        return model_type.model_validate_json(json_content)

    async def exists(self, key: str) -> bool:
        """Check if key exists in filesystem."""
        return self._get_full_path(key).exists()

    async def delete(self, key: str) -> bool:
        """Delete file from filesystem."""
        full_path = self._get_full_path(key)

        if full_path.exists():
            await aiofiles.os.remove(full_path)
            return True
        return False

    async def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys with prefix.

        Args:
            prefix: Optional directory prefix. If empty, lists all keys.

        Returns:
            A sorted list of storage keys below the prefix.
        """
        search_path = self._get_full_path(prefix) if prefix else self.base_path

        if not search_path.exists():
            return []

        return sorted(
            path.relative_to(self.base_path).as_posix()
            for path in search_path.rglob("*")
            if path.is_file()
        )

    def get_local_path(self, key: str) -> Path | None:
        """Get local filesystem path for a key, None when it does not exist."""
        full_path = self._get_full_path(key)
        if full_path.exists():
            return full_path
        return None
