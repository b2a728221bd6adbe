"""Unit tests for config extraction."""

import pytest

from apkforge.models.analysis import (
    AndroidBuildConfig,
    CordovaBuildConfig,
    FlutterBuildConfig,
    Framework,
    GenericBuildConfig,
    ReactNativeBuildConfig,
)
from apkforge.services.extraction import GenericExtractor, get_extractor, patterns
from apkforge.services.scanner import list_project_files


def run_extractor(framework, root):
    return get_extractor(framework).extract(root, list_project_files(root))


class TestPatterns:
    """Tests for the text-pattern helpers."""

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("minSdkVersion 23", 23),
            ("minSdkVersion = 24", 24),
            ("minSdk = 26", 26),
            ("minSdk(28)", 28),
        ],
    )
    def test_gradle_int_accepts_groovy_and_kotlin(self, content, expected):
        """Test SDK token parsing in both Gradle dialects."""
        result = patterns.gradle_int(content, "minSdk", "build.gradle")

        assert result.success
        assert result.data == expected

    def test_gradle_int_missing_reports_diagnostic(self):
        """Test the diagnostic when no SDK token is present."""
        result = patterns.gradle_int("android {}", "targetSdk", "app/build.gradle")

        assert not result.success
        assert result.error == "targetSdkVersion not found in app/build.gradle"

    def test_gradle_int_ignores_compile_sdk(self):
        """Test that compileSdkVersion is not mistaken for targetSdkVersion."""
        result = patterns.gradle_int("compileSdkVersion 31", "targetSdk", "build.gradle")

        assert not result.success

    def test_gradle_dependencies(self):
        """Test listing group:artifact coordinates."""
        content = (
            "implementation 'androidx.core:core-ktx:1.12.0'\n"
            'testImplementation("junit:junit:4.13.2")\n'
            "implementation 'androidx.core:core-ktx:1.12.0'\n"
        )

        assert patterns.gradle_dependencies(content) == ["androidx.core:core-ktx", "junit:junit"]

    def test_xml_attribute_scoped_to_tag(self):
        """Test that the XML declaration version is not read as the widget version."""
        content = '<?xml version="1.0"?>\n<widget id="a.b" version="2.0.1"></widget>'

        assert patterns.xml_attribute(content, "widget", "version", "config.xml").data == "2.0.1"

    def test_yaml_block_keys_first_level_only(self):
        """Test that nested keys under a dependency are not listed."""
        content = "dependencies:\n  flutter:\n    sdk: flutter\n  http: ^1.0.0\ndev_dependencies:\n  lints: any\n"

        assert patterns.yaml_block_keys(content, "dependencies") == ["flutter", "http"]


class TestReactNativeExtractor:
    """Tests for React Native extraction."""

    def test_extracts_fields(self, react_native_project):
        """Test that package.json wins over Gradle for name and version."""
        extraction = run_extractor(Framework.REACT_NATIVE, react_native_project)
        config = extraction.build_config

        assert isinstance(config, ReactNativeBuildConfig)
        assert config.app_name == "Awesome App"
        assert config.version == "2.3.1"
        assert config.package_name == "com.awesome.app"
        assert (config.target_sdk, config.min_sdk) == (34, 23)
        assert config.has_package_json and config.has_android_build_gradle and config.has_app_build_gradle
        assert extraction.sdk_found
        assert extraction.dependencies == ["react", "react-native", "axios"]
        assert extraction.missing_files == []
        assert extraction.errors == []
        assert extraction.source_files == 3

    def test_missing_checklist_files(self, temp_dir, make_tree):
        """Test that missing files follow checklist order."""
        root = make_tree(temp_dir, {"package.json": "{}", "metro.config.js": ""})

        extraction = run_extractor(Framework.REACT_NATIVE, root)

        assert extraction.missing_files == ["android/build.gradle", "android/app/build.gradle"]

    def test_malformed_package_json_degrades(self, temp_dir, make_tree):
        """Test that a broken package.json yields defaults and a diagnostic."""
        root = make_tree(temp_dir, {"package.json": "{not json", "metro.config.js": ""})

        extraction = run_extractor(Framework.REACT_NATIVE, root)

        assert extraction.build_config.app_name == "Mobile App"
        assert extraction.build_config.version == "1.0.0"
        assert "Failed to parse package.json" in extraction.errors


class TestFlutterExtractor:
    """Tests for Flutter extraction."""

    def test_extracts_fields(self, flutter_project):
        """Test pubspec name, version and dependency block."""
        extraction = run_extractor(Framework.FLUTTER, flutter_project)
        config = extraction.build_config

        assert isinstance(config, FlutterBuildConfig)
        assert config.app_name == "shiny_app"
        assert config.version == "1.4.0"
        assert config.has_pubspec and config.has_main_dart
        assert (config.target_sdk, config.min_sdk) == (33, 21)
        assert not extraction.sdk_found
        assert extraction.dependencies == ["flutter", "http"]
        assert extraction.missing_files == ["android/build.gradle"]
        assert extraction.source_files == 2


class TestAndroidExtractor:
    """Tests for native Android extraction."""

    def test_gradle_without_sdk_tokens_uses_defaults(self, temp_dir, make_tree):
        """Test that missing SDK tokens give documented defaults plus diagnostics."""
        root = make_tree(temp_dir, {"build.gradle": "", "app/build.gradle": "android {\n}\n"})

        extraction = run_extractor(Framework.ANDROID, root)

        assert extraction.build_config.target_sdk == 33
        assert extraction.build_config.min_sdk == 21
        assert not extraction.sdk_found
        assert "targetSdkVersion not found in app/build.gradle; using default 33" in extraction.errors
        assert "minSdkVersion not found in app/build.gradle; using default 21" in extraction.errors

    def test_kotlin_dsl(self, temp_dir, make_tree):
        """Test Kotlin DSL scripts and dependency coordinates."""
        root = make_tree(
            temp_dir,
            {
                "build.gradle.kts": "",
                "app/build.gradle.kts": (
                    "android {\n"
                    "    defaultConfig {\n"
                    '        applicationId = "com.kts.app"\n'
                    "        minSdk = 24\n"
                    "        targetSdk = 34\n"
                    '        versionName = "3.1"\n'
                    "    }\n"
                    "}\n"
                    'dependencies { implementation("com.squareup.okhttp3:okhttp:4.12.0") }\n'
                ),
                "app/src/main/AndroidManifest.xml": "<manifest/>",
                "app/src/main/java/Main.kt": "",
            },
        )

        extraction = run_extractor(Framework.ANDROID, root)
        config = extraction.build_config

        assert isinstance(config, AndroidBuildConfig)
        assert (config.target_sdk, config.min_sdk) == (34, 24)
        assert config.package_name == "com.kts.app"
        assert config.version == "3.1"
        assert extraction.dependencies == ["com.squareup.okhttp3:okhttp"]
        assert extraction.missing_files == []
        assert extraction.source_files == 1

    def test_module_gradle_does_not_satisfy_root_gradle(self, temp_dir, make_tree):
        """Test that app/build.gradle alone leaves the root build.gradle missing."""
        root = make_tree(
            temp_dir,
            {
                "app/build.gradle": "android {}\n",
                "app/src/main/AndroidManifest.xml": "<manifest/>",
                "A.java": "",
            },
        )

        extraction = run_extractor(Framework.ANDROID, root)

        assert extraction.missing_files == ["build.gradle"]
        assert not extraction.build_config.has_build_gradle
        assert extraction.build_config.has_app_build_gradle

    def test_manifest_package_and_label(self, temp_dir, make_tree):
        """Test that manifest values are used when Gradle has none."""
        root = make_tree(
            temp_dir,
            {
                "build.gradle": "",
                "app/build.gradle": "minSdkVersion 21\ntargetSdkVersion 33\n",
                "app/src/main/AndroidManifest.xml": (
                    '<?xml version="1.0" encoding="utf-8"?>\n'
                    '<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.manifest.app">\n'
                    '    <application android:label="Manifest Label"></application>\n'
                    "</manifest>\n"
                ),
            },
        )

        config = run_extractor(Framework.ANDROID, root).build_config

        assert config.package_name == "com.manifest.app"
        assert config.app_name == "Manifest Label"

    def test_resource_label_is_ignored(self, temp_dir, make_tree):
        """Test that a string resource reference is not used as the app name."""
        root = make_tree(
            temp_dir,
            {
                "app/build.gradle": "",
                "app/src/main/AndroidManifest.xml": '<manifest><application android:label="@string/app_name"/></manifest>',
            },
        )

        assert run_extractor(Framework.ANDROID, root).build_config.app_name == "Mobile App"


class TestCordovaExtractor:
    """Tests for Cordova extraction."""

    def test_extracts_widget_fields(self, temp_dir, make_tree):
        """Test name, version, id and plugin dependencies."""
        root = make_tree(
            temp_dir,
            {
                "config.xml": (
                    "<?xml version='1.0' encoding='utf-8'?>\n"
                    '<widget id="io.cordova.hello" version="0.5.0" xmlns="http://www.w3.org/ns/widgets">\n'
                    "    <name>Hello Cordova</name>\n"
                    '    <plugin name="cordova-plugin-camera" spec="^6.0.0" />\n'
                    "</widget>\n"
                ),
                "www/index.html": "<html></html>",
            },
        )

        extraction = run_extractor(Framework.CORDOVA, root)
        config = extraction.build_config

        assert isinstance(config, CordovaBuildConfig)
        assert config.app_name == "Hello Cordova"
        assert config.version == "0.5.0"
        assert config.package_name == "io.cordova.hello"
        assert config.has_config_xml and config.has_index_html
        assert extraction.dependencies == ["cordova-plugin-camera"]
        assert extraction.missing_files == ["platforms/android"]


class TestGenericExtractor:
    """Tests for the generic fallback extractor."""

    def test_title_from_index_html(self, generic_project):
        """Test reading the app name from the page title."""
        extraction = run_extractor(Framework.GENERIC_MOBILE, generic_project)

        assert isinstance(extraction.build_config, GenericBuildConfig)
        assert extraction.build_config.app_name == "My Web App"
        assert extraction.missing_files == []

    def test_package_json_name_wins(self, temp_dir, make_tree):
        """Test that package.json takes precedence over the page title."""
        root = make_tree(
            temp_dir,
            {
                "package.json": '{"name": "webby", "version": "0.2.0", "dependencies": {"lodash": "4"}}',
                "index.html": "<title>Ignored</title>",
            },
        )

        extraction = run_extractor(Framework.GENERIC_MOBILE, root)

        assert extraction.build_config.app_name == "webby"
        assert extraction.build_config.version == "0.2.0"
        assert extraction.dependencies == ["lodash"]

    def test_unknown_maps_to_generic_extractor(self):
        """Test the registry lookup for unknown."""
        assert isinstance(get_extractor(Framework.UNKNOWN), GenericExtractor)
