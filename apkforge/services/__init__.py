"""Services package for APKForge."""

from .analysis import ProjectAnalyzer
from .classifier import classify, normalize
from .extraction import get_extractor
from .ingestion import IngestionService
from .packaging import ApkAssembler
from .scaffolding import ScaffoldingSynthesizer
from .scanner import list_project_files
from .validation import validate_requirements, validate_structure

__all__ = [
    "ProjectAnalyzer",
    "classify",
    "normalize",
    "get_extractor",
    "IngestionService",
    "ApkAssembler",
    "ScaffoldingSynthesizer",
    "list_project_files",
    "validate_requirements",
    "validate_structure",
]
