"""Core infrastructure components for APKForge."""

from .config import Config, get_config
from .exceptions import (
    APKForgeError,
    ExtractionError,
    IngestionError,
    PackagingError,
    PipelineError,
    ServiceError,
    ValidationError,
)
from .logging import get_logger, setup_logging
from .types import ServiceResult, StageResult, StageStatus

__all__ = [
    "Config",
    "get_config",
    "APKForgeError",
    "ExtractionError",
    "IngestionError",
    "PackagingError",
    "PipelineError",
    "ServiceError",
    "ValidationError",
    "get_logger",
    "setup_logging",
    "ServiceResult",
    "StageResult",
    "StageStatus",
]
