"""Unit tests for requirement and structure validation."""

import pytest

from apkforge.models.analysis import (
    Analysis,
    AndroidBuildConfig,
    CordovaBuildConfig,
    FlutterBuildConfig,
    Framework,
    GenericBuildConfig,
    ReactNativeBuildConfig,
)
from apkforge.services.validation import essential_files, validate_requirements, validate_structure


class TestValidateRequirements:
    """Tests for the pre-synthesis gate."""

    @pytest.mark.parametrize(
        "config,message",
        [
            (ReactNativeBuildConfig(has_package_json=False), "React Native project missing package.json"),
            (FlutterBuildConfig(has_pubspec=False), "Flutter project missing pubspec.yaml"),
            (AndroidBuildConfig(has_build_gradle=False), "Android project missing build.gradle"),
            (CordovaBuildConfig(has_config_xml=False), "Cordova project missing config.xml"),
        ],
    )
    def test_missing_primary_descriptor(self, config, message):
        """Test the itemized error for each framework."""
        analysis = Analysis(framework=config.framework, build_config=config)

        assert validate_requirements(analysis) == [message]

    @pytest.mark.parametrize(
        "config",
        [
            ReactNativeBuildConfig(has_package_json=True),
            FlutterBuildConfig(has_pubspec=True),
            AndroidBuildConfig(has_build_gradle=True),
            AndroidBuildConfig(has_build_gradle=False, has_app_build_gradle=True),
            CordovaBuildConfig(has_config_xml=True),
            GenericBuildConfig(),
        ],
    )
    def test_present_descriptor_passes(self, config):
        """Test that frameworks with their descriptor pass, generic always passes."""
        analysis = Analysis(framework=config.framework, build_config=config)

        assert validate_requirements(analysis) == []


class TestValidateStructure:
    """Tests for the post-synthesis gate."""

    def test_generic_has_no_essential_files(self, temp_dir):
        """Test that generic-mobile always passes."""
        assert essential_files(Framework.GENERIC_MOBILE) == []
        assert validate_structure(temp_dir, Framework.GENERIC_MOBILE) == []

    def test_unknown_uses_generic_list(self, temp_dir):
        """Test that unknown is validated like generic-mobile."""
        assert validate_structure(temp_dir, Framework.UNKNOWN) == []

    def test_react_native_needs_entry_script(self, temp_dir):
        """Test that React Native requires index.js next to package.json."""
        (temp_dir / "package.json").write_text("{}")

        assert validate_structure(temp_dir, Framework.REACT_NATIVE) == ["Missing essential file: index.js"]

        (temp_dir / "index.js").write_text("")
        assert validate_structure(temp_dir, Framework.REACT_NATIVE) == []

    def test_android_accepts_kotlin_dsl(self, temp_dir, make_tree):
        """Test that build.gradle.kts satisfies the Gradle requirement."""
        make_tree(temp_dir, {"build.gradle.kts": "", "app/src/main/AndroidManifest.xml": "<manifest/>"})

        assert validate_structure(temp_dir, Framework.ANDROID) == []

    def test_flutter_reports_every_missing_file(self, temp_dir):
        """Test that all absent files are listed."""
        assert validate_structure(temp_dir, Framework.FLUTTER) == [
            "Missing essential file: pubspec.yaml",
            "Missing essential file: lib/main.dart",
        ]
