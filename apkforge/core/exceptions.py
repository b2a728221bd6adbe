"""
Custom exception hierarchy for APKForge.

All exceptions inherit from APKForgeError to enable consistent error handling
across the pipeline. Each exception type includes context for debugging and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class APKForgeError(Exception):
    """Base exception for all APKForge errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(APKForgeError):
    """Raised when input or output validation fails."""

    field_name: str | None = None
    expected_type: str | None = None
    actual_value: Any = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class ServiceError(APKForgeError):
    """Raised when a service operation fails."""

    service_name: str = ""
    operation: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"[{self.service_name}.{self.operation}]: {base}"


@dataclass
class ExtractionError(ServiceError):
    """Raised when a configuration file cannot be read or parsed.

    Extractors catch this locally and degrade the affected fields to their
    defaults, so it never reaches the pipeline.
    """

    file_path: str = ""

    def __post_init__(self) -> None:
        self.service_name = "extraction"


@dataclass
class PackagingError(ServiceError):
    """Raised when an archive entry or the archive itself cannot be produced."""

    entry_name: str = ""

    def __post_init__(self) -> None:
        self.service_name = "packaging"


@dataclass
class IngestionError(ServiceError):
    """Raised when an uploaded project archive cannot be accepted or extracted."""

    archive_path: str = ""

    def __post_init__(self) -> None:
        self.service_name = "ingestion"


@dataclass
class PipelineError(APKForgeError):
    """Raised when pipeline orchestration fails."""

    stage: str = ""
    project_id: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Pipeline error at stage '{self.stage}' (project: {self.project_id}): {base}"
