"""
Project record models.

Records persisted by the record store for each uploaded project: its status
as it moves through upload, analysis and build, and the log lines emitted
along the way.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from .analysis import BuildConfig, Framework, ProjectStats


class ProjectStatus(str, Enum):
    """Lifecycle status of an uploaded project."""

    UPLOADED = "uploaded"
    EXTRACTED = "extracted"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"
    BUILDING = "building"
    COMPLETED = "completed"
    ERROR = "error"


class ProjectRecord(BaseModel):
    """Persisted state of one uploaded project."""

    project_id: str = Field(description="Unique project identifier")
    name: str = Field(description="Display name derived from the archive file name")
    original_file_name: str = Field(description="Uploaded archive file name")
    file_size: int = Field(default=0, ge=0, description="Uploaded archive size in bytes")
    status: ProjectStatus = Field(default=ProjectStatus.UPLOADED)
    progress: int = Field(default=0, ge=0, le=100)
    framework: Framework | None = Field(default=None)
    build_config: BuildConfig | None = Field(default=None)
    project_stats: ProjectStats | None = Field(default=None)
    apk_path: str | None = Field(default=None)
    apk_size: int | None = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class BuildLogEntry(BaseModel):
    """A single log line attached to a project."""

    project_id: str
    level: Literal["info", "warning", "error"] = "info"
    message: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
