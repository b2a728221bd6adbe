"""
Framework classifier.

Infers which mobile framework produced a project from its file list alone.
The rules are checked in a fixed order and the first match wins, since one
tree can satisfy several weak signals at once. A ``package.json`` on its own
is not enough for React Native because plain web and node projects have one
too, so that rule needs a second, corroborating marker.
"""

from __future__ import annotations

from collections.abc import Sequence

from ...models.analysis import Classification, Framework, Language, ProjectType

PACKAGE_DESCRIPTOR = "package.json"
REACT_NATIVE_MARKERS = ("react-native", "metro.config")
DART_MANIFEST = "pubspec.yaml"
GRADLE_DESCRIPTOR = "build.gradle"
ANDROID_MANIFEST = "AndroidManifest.xml"
WIDGET_CONFIG = "config.xml"
WEB_ROOT = "www"

UNKNOWN = Classification(framework=Framework.UNKNOWN)


def classify(files: Sequence[str]) -> Classification:
    """Classify a project from its relative file paths.

    Args:
        files: Relative paths as produced by the file-tree walker.

    Returns:
        Classification: always one of the framework tags, ``unknown`` when
            no rule matched.
    """
    if _any_contains(files, PACKAGE_DESCRIPTOR) and any(
        _any_contains(files, marker) for marker in REACT_NATIVE_MARKERS
    ):
        return Classification(
            framework=Framework.REACT_NATIVE,
            language=Language.JAVASCRIPT,
            project_type=ProjectType.HYBRID,
        )

    if _any_contains(files, DART_MANIFEST):
        return Classification(
            framework=Framework.FLUTTER,
            language=Language.DART,
            project_type=ProjectType.HYBRID,
        )

    if _any_contains(files, GRADLE_DESCRIPTOR) or _any_contains(files, ANDROID_MANIFEST):
        if any(f.endswith(".kt") for f in files):
            language = Language.KOTLIN
        elif any(f.endswith(".java") for f in files):
            language = Language.JAVA
        else:
            language = Language.UNKNOWN
        return Classification(
            framework=Framework.ANDROID,
            language=language,
            project_type=ProjectType.NATIVE,
        )

    if any(WIDGET_CONFIG in f and WEB_ROOT in f for f in files):
        return Classification(
            framework=Framework.CORDOVA,
            language=Language.JAVASCRIPT,
            project_type=ProjectType.HYBRID,
        )

    return UNKNOWN


def normalize(classification: Classification) -> Classification:
    """Degrade an ``unknown`` classification to ``generic-mobile``.

    Downstream stages branch exhaustively on the framework tag, so the
    pipeline never carries ``unknown`` past analysis.
    """
    if classification.framework is not Framework.UNKNOWN:
        return classification
    return classification.model_copy(update={"framework": Framework.GENERIC_MOBILE})


def _any_contains(files: Sequence[str], needle: str) -> bool:
    return any(needle in f for f in files)
