"""Orchestration module for APKForge."""

from .pipeline import ApkBuilder
from .progress import ProgressObserver, ProgressRecorder, ProgressReporter

__all__ = [
    "ApkBuilder",
    "ProgressObserver",
    "ProgressRecorder",
    "ProgressReporter",
]
