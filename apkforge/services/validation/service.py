"""
Requirement and structure validators.

Two independent gates around scaffolding synthesis. The requirement gate
runs before anything is written and only looks at the presence flags of the
build config. The structure gate runs after synthesis and checks the disk.
"""

from __future__ import annotations

from pathlib import Path

from ...core.logging import get_logger
from ...models.analysis import (
    Analysis,
    AndroidBuildConfig,
    CordovaBuildConfig,
    FlutterBuildConfig,
    Framework,
    ReactNativeBuildConfig,
)

logger = get_logger(__name__)

# Each entry is a group of alternatives; one existing member satisfies it.
ESSENTIAL_FILES: dict[Framework, tuple[tuple[str, ...], ...]] = {
    Framework.REACT_NATIVE: (("package.json",), ("index.js",)),
    Framework.FLUTTER: (("pubspec.yaml",), ("lib/main.dart",)),
    Framework.ANDROID: (("build.gradle", "build.gradle.kts"), ("app/src/main/AndroidManifest.xml",)),
    Framework.CORDOVA: (("config.xml",), ("www/index.html",)),
    Framework.GENERIC_MOBILE: (),
}


def validate_requirements(analysis: Analysis) -> list[str]:
    """Check the minimum source files a framework needs before synthesis.

    Args:
        analysis: Analysis whose build config presence flags are inspected.

    Returns:
        list[str]: User-facing errors; empty when the build may proceed.
    """
    config = analysis.build_config
    errors: list[str] = []

    if isinstance(config, ReactNativeBuildConfig):
        if not config.has_package_json:
            errors.append("React Native project missing package.json")
    elif isinstance(config, FlutterBuildConfig):
        if not config.has_pubspec:
            errors.append("Flutter project missing pubspec.yaml")
    elif isinstance(config, AndroidBuildConfig):
        # A module script is enough; the root script can be synthesized
        if not (config.has_build_gradle or config.has_app_build_gradle):
            errors.append("Android project missing build.gradle")
    elif isinstance(config, CordovaBuildConfig):
        if not config.has_config_xml:
            errors.append("Cordova project missing config.xml")

    if errors:
        logger.warning("Requirement validation failed", framework=analysis.framework.value, errors=errors)
    return errors


def essential_files(framework: Framework) -> list[str]:
    """List the files structure validation expects, first alternative of each group."""
    return [group[0] for group in ESSENTIAL_FILES[framework.normalized()]]


def validate_structure(project_path: Path, framework: Framework) -> list[str]:
    """Check that the essential files of a framework exist on disk.

    Args:
        project_path: Project root directory.
        framework: Framework whose essential-file list applies.

    Returns:
        list[str]: One ``Missing essential file: ...`` entry per absent file.
    """
    missing = [
        f"Missing essential file: {group[0]}"
        for group in ESSENTIAL_FILES[framework.normalized()]
        if not any((project_path / candidate).is_file() for candidate in group)
    ]
    if missing:
        logger.warning("Structure validation failed", framework=framework.value, missing=missing)
    return missing
