"""
Project analysis models.

These models describe what the classifier and the config extractors learned
about one version of an uploaded project tree. An ``Analysis`` is an
immutable snapshot: every run builds a fresh one instead of updating the
previous record.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_TARGET_SDK = 33
DEFAULT_MIN_SDK = 21
DEFAULT_APP_NAME = "Mobile App"
DEFAULT_VERSION = "1.0.0"


class Framework(str, Enum):
    """Mobile frameworks the classifier can recognise."""

    REACT_NATIVE = "react-native"
    FLUTTER = "flutter"
    ANDROID = "android"
    CORDOVA = "cordova"
    GENERIC_MOBILE = "generic-mobile"
    UNKNOWN = "unknown"

    def normalized(self) -> Framework:
        """Map ``unknown`` onto ``generic-mobile``; other tags are returned as-is."""
        if self is Framework.UNKNOWN:
            return Framework.GENERIC_MOBILE
        return self


class Language(str, Enum):
    """Primary source language inferred for a project."""

    JAVASCRIPT = "javascript"
    DART = "dart"
    KOTLIN = "kotlin"
    JAVA = "java"
    UNKNOWN = "unknown"


class ProjectType(str, Enum):
    """Whether a project is a native Android app or a cross-platform one."""

    HYBRID = "hybrid"
    NATIVE = "native"
    UNKNOWN = "unknown"


class Classification(BaseModel):
    """Framework, language and project type assigned by the classifier."""

    model_config = ConfigDict(frozen=True)

    framework: Framework
    language: Language = Language.UNKNOWN
    project_type: ProjectType = ProjectType.UNKNOWN


class _BuildConfigBase(BaseModel):
    """Fields every framework variant carries, with their documented defaults."""

    model_config = ConfigDict(frozen=True)

    target_sdk: int = Field(default=DEFAULT_TARGET_SDK, description="targetSdkVersion")
    min_sdk: int = Field(default=DEFAULT_MIN_SDK, description="minSdkVersion")
    app_name: str = Field(default=DEFAULT_APP_NAME, description="Human-readable app label")
    version: str = Field(default=DEFAULT_VERSION, description="Version name")
    package_name: str | None = Field(default=None, description="Application id if one was found")

    def resolved_package_name(self, framework: Framework) -> str:
        """Return the extracted package name or a framework-namespaced placeholder.

        Args:
            framework: Framework tag used to build the placeholder.

        Returns:
            str: e.g. ``com.reactnative.app`` when nothing was extracted.
        """
        if self.package_name:
            return self.package_name
        return f"com.{framework.value.replace('-', '')}.app"


class ReactNativeBuildConfig(_BuildConfigBase):
    """Build configuration of a React Native project."""

    framework: Literal[Framework.REACT_NATIVE] = Framework.REACT_NATIVE
    has_package_json: bool = False
    has_android_build_gradle: bool = False
    has_app_build_gradle: bool = False


class FlutterBuildConfig(_BuildConfigBase):
    """Build configuration of a Flutter project."""

    framework: Literal[Framework.FLUTTER] = Framework.FLUTTER
    has_pubspec: bool = False
    has_main_dart: bool = False


class AndroidBuildConfig(_BuildConfigBase):
    """Build configuration of a native Android project."""

    framework: Literal[Framework.ANDROID] = Framework.ANDROID
    has_build_gradle: bool = False
    has_app_build_gradle: bool = False
    has_manifest: bool = False


class CordovaBuildConfig(_BuildConfigBase):
    """Build configuration of an Apache Cordova project."""

    framework: Literal[Framework.CORDOVA] = Framework.CORDOVA
    has_config_xml: bool = False
    has_index_html: bool = False


class GenericBuildConfig(_BuildConfigBase):
    """Build configuration of a project that matched no specific framework."""

    framework: Literal[Framework.GENERIC_MOBILE] = Framework.GENERIC_MOBILE


BuildConfig = Annotated[
    Union[
        ReactNativeBuildConfig,
        FlutterBuildConfig,
        AndroidBuildConfig,
        CordovaBuildConfig,
        GenericBuildConfig,
    ],
    Field(discriminator="framework"),
]

BUILD_CONFIG_TYPES: dict[Framework, type[_BuildConfigBase]] = {
    Framework.REACT_NATIVE: ReactNativeBuildConfig,
    Framework.FLUTTER: FlutterBuildConfig,
    Framework.ANDROID: AndroidBuildConfig,
    Framework.CORDOVA: CordovaBuildConfig,
    Framework.GENERIC_MOBILE: GenericBuildConfig,
}


def default_build_config(framework: Framework) -> BuildConfig:
    """Create the all-defaults build config variant for a framework."""
    return BUILD_CONFIG_TYPES[framework.normalized()]()  # type: ignore[return-value]


class ProjectStats(BaseModel):
    """Counts shown alongside an analysis."""

    model_config = ConfigDict(frozen=True)

    total_files: int = Field(default=0, ge=0)
    source_files: int = Field(default=0, ge=0)
    dependencies: int = Field(default=0, ge=0)
    target_sdk: int | None = Field(default=None)
    min_sdk: int | None = Field(default=None)


class Analysis(BaseModel):
    """Classification plus extraction results for one project version."""

    model_config = ConfigDict(frozen=True)

    framework: Framework = Field(description="Detected framework, never 'unknown'")
    language: Language = Field(default=Language.UNKNOWN)
    project_type: ProjectType = Field(default=ProjectType.UNKNOWN)
    missing_files: tuple[str, ...] = Field(
        default=(), description="Required-but-absent paths, in checklist order"
    )
    dependencies: tuple[str, ...] = Field(default=(), description="Declared dependency names")
    build_config: BuildConfig
    project_stats: ProjectStats = Field(default_factory=ProjectStats)
    errors: tuple[str, ...] = Field(default=(), description="Soft diagnostics")

    @model_validator(mode="before")
    @classmethod
    def _fill_default_config(cls, data: object) -> object:
        if isinstance(data, dict) and data.get("build_config") is None:
            framework = Framework(data.get("framework", Framework.UNKNOWN)).normalized()
            data = {**data, "build_config": default_build_config(framework)}
        return data

    @field_validator("framework")
    @classmethod
    def _degrade_unknown(cls, value: Framework) -> Framework:
        return value.normalized()

    @model_validator(mode="after")
    def _check_config_variant(self) -> Analysis:
        if self.build_config.framework != self.framework:
            raise ValueError(
                f"build_config is for {self.build_config.framework.value}, "
                f"analysis is for {self.framework.value}"
            )
        return self

    @property
    def has_valid_structure(self) -> bool:
        """True when extraction produced no diagnostics."""
        return not self.errors
