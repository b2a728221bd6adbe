"""
Build result models.

A ``BuildResult`` is created once per build invocation and filled in as the
pipeline moves through its stages. Errors and logs are only ever appended.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class BuildStage(str, Enum):
    """States of the build state machine."""

    IDLE = "idle"
    VALIDATING_REQUIREMENTS = "validating_requirements"
    SYNTHESIZING_SCAFFOLD = "synthesizing_scaffold"
    VALIDATING_STRUCTURE = "validating_structure"
    PACKAGING = "packaging"
    COMPLETED = "completed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition can happen from this stage."""
        return self in (BuildStage.COMPLETED, BuildStage.ABORTED)


class BuildResult(BaseModel):
    """Outcome of one build invocation."""

    success: bool = Field(default=False, description="Terminal outcome")
    apk_path: Path | None = Field(default=None, description="Archive location, set on success")
    apk_size: int | None = Field(default=None, description="Archive size in bytes, set on success")
    errors: list[str] = Field(default_factory=list)
    logs: list[str] = Field(default_factory=list)
    stage: BuildStage = Field(default=BuildStage.IDLE, description="Last stage reached")

    def add_error(self, message: str) -> None:
        """Append a user-facing error message."""
        self.errors.append(message)

    def add_log(self, message: str) -> None:
        """Append a human-readable log line."""
        self.logs.append(message)

    def abort(self, *errors: str) -> BuildResult:
        """Record errors and move to the aborted state."""
        self.errors.extend(errors)
        self.success = False
        self.stage = BuildStage.ABORTED
        return self

    def complete(self, apk_path: Path, apk_size: int) -> BuildResult:
        """Record the produced archive and move to the completed state."""
        self.success = True
        self.apk_path = apk_path
        self.apk_size = apk_size
        self.stage = BuildStage.COMPLETED
        return self

    @property
    def apk_size_mb(self) -> float:
        """Archive size in mebibytes, 0.0 when no archive was produced."""
        return (self.apk_size or 0) / (1024 * 1024)
