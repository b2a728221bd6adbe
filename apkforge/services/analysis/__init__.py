"""Project analysis: walk, classify, extract."""

from .service import ProjectAnalyzer

__all__ = ["ProjectAnalyzer"]
