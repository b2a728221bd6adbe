"""
APKForge Data Models.

This module contains all Pydantic models used throughout the pipeline for
type-safe data representation of analyses, build results and project records.
"""

from .analysis import (
    DEFAULT_APP_NAME,
    DEFAULT_MIN_SDK,
    DEFAULT_TARGET_SDK,
    DEFAULT_VERSION,
    Analysis,
    AndroidBuildConfig,
    BuildConfig,
    Classification,
    CordovaBuildConfig,
    FlutterBuildConfig,
    Framework,
    GenericBuildConfig,
    Language,
    ProjectStats,
    ProjectType,
    ReactNativeBuildConfig,
    default_build_config,
)
from .build import BuildResult, BuildStage
from .project import BuildLogEntry, ProjectRecord, ProjectStatus

__all__ = [
    # Analysis models
    "DEFAULT_APP_NAME",
    "DEFAULT_MIN_SDK",
    "DEFAULT_TARGET_SDK",
    "DEFAULT_VERSION",
    "Analysis",
    "AndroidBuildConfig",
    "BuildConfig",
    "Classification",
    "CordovaBuildConfig",
    "FlutterBuildConfig",
    "Framework",
    "GenericBuildConfig",
    "Language",
    "ProjectStats",
    "ProjectType",
    "ReactNativeBuildConfig",
    "default_build_config",
    # Build models
    "BuildResult",
    "BuildStage",
    # Record models
    "BuildLogEntry",
    "ProjectRecord",
    "ProjectStatus",
]
