"""
Config Extraction Service.

One extractor per framework. Each extractor declares the files a buildable
project of its framework must contain, reads at most a couple of well-known
configuration files, and mines scalar fields out of them with text patterns.
Nothing here raises on bad input: unreadable or malformed files degrade the
affected fields to their documented defaults and leave a diagnostic behind.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from ...core.exceptions import ExtractionError
from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...models.analysis import (
    DEFAULT_APP_NAME,
    DEFAULT_MIN_SDK,
    DEFAULT_TARGET_SDK,
    DEFAULT_VERSION,
    AndroidBuildConfig,
    BuildConfig,
    CordovaBuildConfig,
    FlutterBuildConfig,
    Framework,
    GenericBuildConfig,
    ReactNativeBuildConfig,
)
from . import patterns

logger = get_logger(__name__)


@dataclass
class Extraction:
    """Everything one extractor learned about a project."""

    build_config: BuildConfig
    missing_files: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    source_files: int = 0
    sdk_found: bool = False
    errors: list[str] = field(default_factory=list)


class ConfigExtractor(ABC):
    """Base class for framework-specific extractors."""

    framework: ClassVar[Framework]
    required_files: ClassVar[tuple[str, ...]] = ()
    source_extensions: ClassVar[tuple[str, ...]] = ()

    def missing_files(self, files: Sequence[str]) -> list[str]:
        """Return checklist entries absent from ``files``, in checklist order."""
        return [required for required in self.required_files if not _present(files, required)]

    def count_source_files(self, files: Sequence[str]) -> int:
        """Count files whose extension belongs to this framework's source set."""
        return sum(1 for f in files if f.endswith(self.source_extensions))

    def extract(self, project_path: Path, files: Sequence[str]) -> Extraction:
        """Run the checklist and field extraction for one project.

        Args:
            project_path: Project root directory.
            files: Relative paths from the file-tree walker.

        Returns:
            Extraction: always fully populated.
        """
        errors: list[str] = []
        extraction = self._extract_fields(project_path, files, errors)
        extraction.missing_files = self.missing_files(files)
        extraction.source_files = self.count_source_files(files)
        extraction.errors = errors + extraction.errors
        return extraction

    @abstractmethod
    def _extract_fields(self, project_path: Path, files: Sequence[str], errors: list[str]) -> Extraction:
        """Read configuration files and build the framework's config variant."""
        ...

    def _read(self, project_path: Path, relative: str) -> str | None:
        """Read a text file from the project, or None when it does not exist.

        Raises:
            ExtractionError: The file exists but cannot be read.
        """
        path = project_path / relative
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ExtractionError(
                message=f"Failed to read {relative}",
                operation="read",
                file_path=relative,
                cause=e,
            ) from e

    def _read_soft(self, project_path: Path, relative: str, errors: list[str]) -> str | None:
        """Like ``_read`` but records read failures as diagnostics."""
        try:
            return self._read(project_path, relative)
        except ExtractionError as e:
            logger.warning("Config file unreadable", file=relative, error=str(e.cause))
            errors.append(e.message)
            return None

    def _gradle_fields(self, content: str | None, source: str, errors: list[str]) -> dict[str, Any]:
        """Extract SDK bounds, application id and version name from an app-level Gradle script."""
        if content is None:
            return {}

        fields: dict[str, Any] = {}
        target = patterns.gradle_int(content, "targetSdk", source)
        minimum = patterns.gradle_int(content, "minSdk", source)
        fields["target_sdk"] = _value_or_default(target, DEFAULT_TARGET_SDK, errors)
        fields["min_sdk"] = _value_or_default(minimum, DEFAULT_MIN_SDK, errors)
        fields["sdk_found"] = target.success or minimum.success

        application_id = patterns.gradle_string(content, "applicationId", source)
        if application_id.success:
            fields["package_name"] = application_id.data
        version_name = patterns.gradle_string(content, "versionName", source)
        if version_name.success:
            fields["version"] = version_name.data
        return fields


class ReactNativeExtractor(ConfigExtractor):
    """React Native: ``package.json`` plus the Android host project."""

    framework = Framework.REACT_NATIVE
    required_files = ("package.json", "android/build.gradle", "android/app/build.gradle")
    source_extensions = (".js", ".jsx", ".ts", ".tsx")

    def _extract_fields(self, project_path: Path, files: Sequence[str], errors: list[str]) -> Extraction:
        values: dict[str, Any] = {}
        dependencies: list[str] = []

        package_json = self._read_soft(project_path, "package.json", errors)
        if package_json is not None:
            parsed = _parse_package_json(package_json)
            if parsed.success:
                manifest = parsed.data or {}
                dependencies = _dependency_names(manifest)
                values.update(_package_json_fields(manifest))
            else:
                errors.append(parsed.error or "Failed to parse package.json")

        gradle = self._read_soft(project_path, "android/app/build.gradle", errors)
        gradle_values = self._gradle_fields(gradle, "android/app/build.gradle", errors)
        sdk_found = gradle_values.pop("sdk_found", False)
        # package.json wins over Gradle where both name a field
        values = {**gradle_values, **values}

        config = ReactNativeBuildConfig(
            has_package_json=_present(files, "package.json"),
            has_android_build_gradle=_present(files, "android/build.gradle"),
            has_app_build_gradle=_present(files, "android/app/build.gradle"),
            **values,
        )
        return Extraction(build_config=config, dependencies=dependencies, sdk_found=sdk_found)


class FlutterExtractor(ConfigExtractor):
    """Flutter: ``pubspec.yaml`` plus the Android host project."""

    framework = Framework.FLUTTER
    required_files = ("pubspec.yaml", "android/build.gradle", "lib/main.dart")
    source_extensions = (".dart",)

    def _extract_fields(self, project_path: Path, files: Sequence[str], errors: list[str]) -> Extraction:
        values: dict[str, Any] = {}
        dependencies: list[str] = []

        pubspec = self._read_soft(project_path, "pubspec.yaml", errors)
        if pubspec is not None:
            dependencies = patterns.yaml_block_keys(pubspec, "dependencies")
            values["app_name"] = _value_or_default(
                patterns.yaml_scalar(pubspec, "name", "pubspec.yaml"), DEFAULT_APP_NAME, errors
            )
            version = _value_or_default(
                patterns.yaml_scalar(pubspec, "version", "pubspec.yaml"), DEFAULT_VERSION, errors
            )
            # "1.2.3+45" carries the build number after the plus sign
            values["version"] = version.split("+", 1)[0]

        gradle = self._read_soft(project_path, "android/app/build.gradle", errors)
        gradle_values = self._gradle_fields(gradle, "android/app/build.gradle", errors)
        sdk_found = gradle_values.pop("sdk_found", False)
        gradle_values.pop("version", None)
        values.update(gradle_values)

        config = FlutterBuildConfig(
            has_pubspec=_present(files, "pubspec.yaml"),
            has_main_dart=_present(files, "lib/main.dart"),
            **values,
        )
        return Extraction(build_config=config, dependencies=dependencies, sdk_found=sdk_found)


class AndroidExtractor(ConfigExtractor):
    """Native Android: Gradle scripts and the application manifest."""

    framework = Framework.ANDROID
    required_files = ("build.gradle", "app/build.gradle", "app/src/main/AndroidManifest.xml")
    source_extensions = (".java", ".kt")

    def _extract_fields(self, project_path: Path, files: Sequence[str], errors: list[str]) -> Extraction:
        values: dict[str, Any] = {}
        dependencies: list[str] = []

        gradle_path = "app/build.gradle.kts" if (project_path / "app/build.gradle.kts").is_file() else "app/build.gradle"
        gradle = self._read_soft(project_path, gradle_path, errors)
        gradle_values = self._gradle_fields(gradle, gradle_path, errors)
        sdk_found = gradle_values.pop("sdk_found", False)
        if gradle is not None:
            dependencies = patterns.gradle_dependencies(gradle)

        manifest_path = "app/src/main/AndroidManifest.xml"
        manifest = self._read_soft(project_path, manifest_path, errors)
        if manifest is not None:
            package = patterns.xml_attribute(manifest, "manifest", "package", manifest_path)
            if package.success:
                values["package_name"] = package.data
            label = patterns.xml_attribute(manifest, "application", "android:label", manifest_path)
            # "@string/app_name" is a resource reference, not a literal label
            if label.success and not (label.data or "").startswith("@"):
                values["app_name"] = label.data

        # applicationId in Gradle overrides the manifest package attribute
        values.update(gradle_values)

        config = AndroidBuildConfig(
            has_build_gradle=_present(files, "build.gradle"),
            has_app_build_gradle=_present(files, "app/build.gradle"),
            has_manifest=_present(files, manifest_path),
            **values,
        )
        return Extraction(build_config=config, dependencies=dependencies, sdk_found=sdk_found)


class CordovaExtractor(ConfigExtractor):
    """Apache Cordova: the ``config.xml`` widget descriptor."""

    framework = Framework.CORDOVA
    required_files = ("config.xml", "www/index.html", "platforms/android")
    source_extensions = (".js", ".html", ".css")

    def _extract_fields(self, project_path: Path, files: Sequence[str], errors: list[str]) -> Extraction:
        values: dict[str, Any] = {}
        dependencies: list[str] = []

        config_xml = self._read_soft(project_path, "config.xml", errors)
        if config_xml is not None:
            values["app_name"] = _value_or_default(
                patterns.xml_element_text(config_xml, "name", "config.xml"), DEFAULT_APP_NAME, errors
            )
            values["version"] = _value_or_default(
                patterns.xml_attribute(config_xml, "widget", "version", "config.xml"), DEFAULT_VERSION, errors
            )
            widget_id = patterns.xml_attribute(config_xml, "widget", "id", "config.xml")
            if widget_id.success:
                values["package_name"] = widget_id.data
            dependencies = patterns.xml_attribute_values(config_xml, "plugin", "name")

        config = CordovaBuildConfig(
            has_config_xml=_present(files, "config.xml"),
            has_index_html=_present(files, "www/index.html"),
            **values,
        )
        return Extraction(build_config=config, dependencies=dependencies)


class GenericExtractor(ConfigExtractor):
    """Anything else: best-effort name and version from web-style root files."""

    framework = Framework.GENERIC_MOBILE
    source_extensions = (".js", ".jsx", ".ts", ".tsx", ".html", ".css", ".dart", ".java", ".kt")

    def _extract_fields(self, project_path: Path, files: Sequence[str], errors: list[str]) -> Extraction:
        values: dict[str, Any] = {}
        dependencies: list[str] = []

        package_json = self._read_soft(project_path, "package.json", errors)
        if package_json is not None:
            parsed = _parse_package_json(package_json)
            if parsed.success:
                manifest = parsed.data or {}
                dependencies = _dependency_names(manifest)
                values.update(_package_json_fields(manifest))
            else:
                errors.append(parsed.error or "Failed to parse package.json")

        index_html = self._read_soft(project_path, "index.html", errors)
        if index_html is not None and "app_name" not in values:
            title = patterns.xml_element_text(index_html, "title", "index.html")
            if title.success:
                values["app_name"] = title.data

        return Extraction(build_config=GenericBuildConfig(**values), dependencies=dependencies)


EXTRACTOR_REGISTRY: dict[Framework, ConfigExtractor] = {}


def register_extractor(extractor: ConfigExtractor) -> None:
    """Register an extractor instance by its framework tag."""
    EXTRACTOR_REGISTRY[extractor.framework] = extractor


def get_extractor(framework: Framework) -> ConfigExtractor:
    """Return the extractor for a framework; ``unknown`` maps to the generic one."""
    return EXTRACTOR_REGISTRY[framework.normalized()]


for _extractor in (
    ReactNativeExtractor(),
    FlutterExtractor(),
    AndroidExtractor(),
    CordovaExtractor(),
    GenericExtractor(),
):
    register_extractor(_extractor)


def _present(files: Sequence[str], required: str) -> bool:
    # Gradle entries are also satisfied by their Kotlin-DSL sibling
    names = {required, f"{required}.kts"} if required.endswith(".gradle") else {required}
    return any(f in names or f.startswith(f"{required}/") for f in files)


def _value_or_default(result: ServiceResult[Any], default: Any, errors: list[str]) -> Any:
    if result.success:
        return result.data
    errors.append(f"{result.error}; using default {default}")
    return default


def _parse_package_json(content: str) -> ServiceResult[dict[str, Any]]:
    try:
        data = json.loads(content)
    except ValueError:
        return ServiceResult.fail("Failed to parse package.json")
    if not isinstance(data, dict):
        return ServiceResult.fail("Failed to parse package.json: top level is not an object")
    return ServiceResult.ok(data)


def _dependency_names(manifest: dict[str, Any]) -> list[str]:
    dependencies = manifest.get("dependencies")
    if not isinstance(dependencies, dict):
        return []
    return [str(name) for name in dependencies]


def _package_json_fields(manifest: dict[str, Any]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    name = manifest.get("displayName") or manifest.get("name")
    if isinstance(name, str) and name.strip():
        values["app_name"] = name.strip()
    version = manifest.get("version")
    if isinstance(version, str) and re.match(r"^\d", version):
        values["version"] = version
    return values
