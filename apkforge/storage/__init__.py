"""Storage abstraction for APKForge."""

from .interface import StorageBackend
from .local import LocalStorageBackend
from .records import ProjectStore

__all__ = ["StorageBackend", "LocalStorageBackend", "ProjectStore"]
