"""
Project record store.

Persists one ``ProjectRecord`` per uploaded project plus its append-only
build log on top of any ``StorageBackend``. Records are JSON documents; the
log is JSON lines so appending never rewrites earlier entries.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Literal

from ..core.logging import get_logger
from ..models.project import BuildLogEntry, ProjectRecord
from .interface import StorageBackend

logger = get_logger(__name__)

RECORDS_PREFIX = "records"
LOGS_PREFIX = "logs"


class ProjectStore:
    """Async store for project records and build logs."""

    def __init__(self, backend: StorageBackend) -> None:
        """Initialize the store.

        Args:
            backend: Storage backend the records are written to.
        """
        self.backend = backend
        self._lock = asyncio.Lock()

    @staticmethod
    def _record_key(project_id: str) -> str:
        return f"{RECORDS_PREFIX}/{project_id}.json"

    @staticmethod
    def _log_key(project_id: str) -> str:
        return f"{LOGS_PREFIX}/{project_id}.jsonl"

    async def save(self, record: ProjectRecord) -> ProjectRecord:
        """Create or replace a project record."""
        await self.backend.store_model(self._record_key(record.project_id), record)
        return record

    async def get(self, project_id: str) -> ProjectRecord | None:
        """Load a project record, None when it does not exist."""
        key = self._record_key(project_id)
        if not await self.backend.exists(key):
            return None
        return await self.backend.load_model(key, ProjectRecord)

    async def update(self, project_id: str, **changes: Any) -> ProjectRecord:
        """Apply field changes to a stored record and refresh ``updated_at``.

        Raises:
            KeyError: No record exists for ``project_id``.
        """
        async with self._lock:
            record = await self.get(project_id)
            if record is None:
                raise KeyError(project_id)
            data = {**record.model_dump(), **changes, "updated_at": datetime.utcnow()}
            updated = ProjectRecord.model_validate(data)
            await self.save(updated)
        return updated

    async def list_projects(self) -> list[ProjectRecord]:
        """Load every stored record, newest first."""
        records = [
            await self.backend.load_model(key, ProjectRecord)
            for key in await self.backend.list_keys(RECORDS_PREFIX)
            if key.endswith(".json")
        ]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    async def delete(self, project_id: str) -> bool:
        """Delete a record and its build log."""
        await self.clear_logs(project_id)
        return await self.backend.delete(self._record_key(project_id))

    async def add_log(
        self,
        project_id: str,
        message: str,
        level: Literal["info", "warning", "error"] = "info",
    ) -> BuildLogEntry:
        """Append one entry to a project's build log."""
        entry = BuildLogEntry(project_id=project_id, level=level, message=message)
        async with self._lock:
            await self.backend.append_text(self._log_key(project_id), entry.model_dump_json() + "\n")
        logger.debug("Build log appended", project_id=project_id, level=level)
        return entry

    async def get_logs(self, project_id: str) -> list[BuildLogEntry]:
        """Return a project's build log in append order."""
        key = self._log_key(project_id)
        if not await self.backend.exists(key):
            return []
        content = await self.backend.load_text(key)
        return [BuildLogEntry.model_validate_json(line) for line in content.splitlines() if line.strip()]

    async def clear_logs(self, project_id: str) -> None:
        """Remove a project's build log."""
        await self.backend.delete(self._log_key(project_id))
