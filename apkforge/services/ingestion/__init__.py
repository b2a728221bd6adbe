"""Project archive ingestion."""

from .service import IngestedProject, IngestionService

__all__ = ["IngestedProject", "IngestionService"]
