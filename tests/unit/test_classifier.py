"""Unit tests for the framework classifier."""

import pytest

from apkforge.models.analysis import Framework, Language, ProjectType
from apkforge.services.classifier import classify, normalize


class TestClassify:
    """Tests for rule-ordered classification."""

    def test_package_json_with_metro_marker_is_react_native(self):
        """Test that package.json plus metro config classifies as React Native."""
        result = classify(["package.json", "metro.config.js"])

        assert result.framework is Framework.REACT_NATIVE
        assert result.language is Language.JAVASCRIPT
        assert result.project_type is ProjectType.HYBRID

    def test_package_json_alone_is_unknown(self):
        """Test that a bare package.json is not enough for React Native."""
        result = classify(["package.json"])

        assert result.framework is Framework.UNKNOWN
        assert normalize(result).framework is Framework.GENERIC_MOBILE

    def test_react_native_path_segment_marker(self):
        """Test that a react-native path counts as the corroborating marker."""
        result = classify(["package.json", "node_modules/react-native/index.js"])

        assert result.framework is Framework.REACT_NATIVE

    def test_pubspec_is_flutter(self):
        """Test Flutter detection."""
        result = classify(["pubspec.yaml", "lib/main.dart"])

        assert result.framework is Framework.FLUTTER
        assert result.language is Language.DART

    def test_react_native_wins_over_flutter(self):
        """Test that rules are applied in order."""
        result = classify(["package.json", "metro.config.js", "pubspec.yaml"])

        assert result.framework is Framework.REACT_NATIVE

    @pytest.mark.parametrize(
        "files,language",
        [
            (["build.gradle", "app/src/main/java/Main.kt"], Language.KOTLIN),
            (["build.gradle", "app/src/main/java/Main.java"], Language.JAVA),
            (["app/src/main/AndroidManifest.xml"], Language.UNKNOWN),
        ],
    )
    def test_android_language(self, files, language):
        """Test native Android detection and its language preference."""
        result = classify(files)

        assert result.framework is Framework.ANDROID
        assert result.project_type is ProjectType.NATIVE
        assert result.language is language

    def test_kotlin_preferred_over_java(self):
        """Test that a mixed tree reports Kotlin."""
        result = classify(["build.gradle", "A.java", "B.kt"])

        assert result.language is Language.KOTLIN

    @pytest.mark.parametrize("files", [["www/config.xml"], ["res/www_config.xml", "index.html"]])
    def test_cordova_needs_config_and_www_on_one_path(self, files):
        """Test Cordova detection when a single path holds both markers."""
        result = classify(files)

        assert result.framework is Framework.CORDOVA
        assert result.language is Language.JAVASCRIPT
        assert result.project_type is ProjectType.HYBRID

    @pytest.mark.parametrize(
        "files",
        [["config.xml"], ["config.xml", "www/index.html"], ["config.xml", "wwwroot.txt"]],
    )
    def test_markers_on_separate_paths_do_not_count(self, files):
        """Test that config.xml and www in different paths are not Cordova."""
        assert classify(files).framework is Framework.UNKNOWN

    @pytest.mark.parametrize(
        "files",
        [[], ["README.md"], ["index.html", "style.css"], ["a/b/c/d.txt"]],
    )
    def test_total_over_arbitrary_inputs(self, files):
        """Test that classification always yields one of the defined tags."""
        assert classify(files).framework in set(Framework)


class TestNormalize:
    """Tests for unknown degradation."""

    def test_known_framework_unchanged(self):
        """Test that a concrete tag passes through."""
        result = classify(["pubspec.yaml"])

        assert normalize(result) == result

    def test_unknown_becomes_generic(self):
        """Test that unknown keeps its unknown language and type."""
        result = normalize(classify([]))

        assert result.framework is Framework.GENERIC_MOBILE
        assert result.language is Language.UNKNOWN
        assert result.project_type is ProjectType.UNKNOWN
