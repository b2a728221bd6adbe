"""
File-tree walker.

Lists every file of an extracted project tree as a POSIX-style path relative
to the project root. Version-control and dependency-cache directories are
skipped, and recursion stops at a configurable depth so that pathological
uploads cannot make the walk unbounded.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from ...core.config import get_config
from ...core.logging import get_logger

logger = get_logger(__name__)


def list_project_files(
    root: Path,
    max_depth: int | None = None,
    ignored_directories: Iterable[str] | None = None,
) -> list[str]:
    """List all files under ``root``.

    Args:
        root: Project root directory.
        max_depth: Deepest directory level to descend into. Files directly
            under ``root`` are at level 0. Defaults to the scanner config.
        ignored_directories: Directory names never descended into. Defaults
            to the scanner config.

    Returns:
        Sorted relative paths using ``/`` separators. Empty when ``root``
        does not exist.
    """
    if max_depth is None or ignored_directories is None:
        scanner = get_config().scanner
        max_depth = scanner.max_depth if max_depth is None else max_depth
        ignored_directories = scanner.ignored_directories if ignored_directories is None else ignored_directories
    ignored = frozenset(ignored_directories)

    if not root.is_dir():
        logger.warning("Project root is not a directory", root=str(root))
        return []

    files: list[str] = []
    _walk(root, "", 0, max_depth, ignored, files)
    files.sort()

    logger.debug("Walked project tree", root=str(root), files=len(files))
    return files


def _walk(
    directory: Path,
    prefix: str,
    depth: int,
    depth_limit: int,
    ignored: frozenset[str],
    files: list[str],
) -> None:
    try:
        entries = list(os.scandir(directory))
    except OSError as e:
        logger.warning("Skipping unreadable directory", directory=str(directory), error=str(e))
        return

    for entry in entries:
        relative = f"{prefix}{entry.name}"
        if entry.is_dir(follow_symlinks=False):
            if entry.name in ignored or depth >= depth_limit:
                continue
            _walk(Path(entry.path), f"{relative}/", depth + 1, depth_limit, ignored, files)
        elif entry.is_file(follow_symlinks=False):
            files.append(relative)
