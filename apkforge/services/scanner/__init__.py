"""File-tree walker."""

from .service import list_project_files

__all__ = ["list_project_files"]
