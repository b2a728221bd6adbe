"""Requirement and structure validators."""

from .service import essential_files, validate_requirements, validate_structure

__all__ = ["essential_files", "validate_requirements", "validate_structure"]
