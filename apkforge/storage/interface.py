"""
Storage backend interface.

Defines the abstract interface for record storage, enabling pluggable
backends (local filesystem, object stores, etc.).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class StorageBackend(ABC):
    """Abstract storage backend interface."""

    @abstractmethod
    async def store_text(self, key: str, content: str) -> str:
        """Store text content and return the storage key.

        Args:
            key: Storage key/path.
            content: Text content to store.

        Returns:
            The final storage key.
        """
        ...

    @abstractmethod
    async def append_text(self, key: str, content: str) -> str:
        """Append text to the content stored at a key, creating it if needed.

        Args:
            key: Storage key/path.
            content: Text to append.

        Returns:
            The final storage key.
        """
        ...

    @abstractmethod
    async def store_model(self, key: str, model: BaseModel) -> str:
        """Store a Pydantic model as JSON.

        Args:
            key: Storage key/path.
            model: Pydantic model instance to store.

        Returns:
            The final storage key.
        """
        ...

    @abstractmethod
    async def load_text(self, key: str) -> str:
        """Load text content from storage.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        ...

    @abstractmethod
    async def load_model(self, key: str, model_type: type[T]) -> T:
        """Load a Pydantic model from storage.

        Args:
            key: Storage key/path to load from.
            model_type: The Pydantic model class to deserialize into.

        Returns:
            The deserialized Pydantic model instance.
        """
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in storage."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key from storage.

        Returns:
            True if the key was deleted, False if it did not exist.
        """
        ...

    @abstractmethod
    async def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys with the given prefix, sorted."""
        ...

    @abstractmethod
    def get_local_path(self, key: str) -> Path | None:
        """Get local filesystem path if available.

        Args:
            key: Storage key/path to get the local path for.

        Returns:
            Local filesystem Path if available, None otherwise.
        """
        ...
