"""Unit tests for scaffolding synthesis."""

import pytest

from apkforge.models.analysis import (
    Analysis,
    AndroidBuildConfig,
    Framework,
    ReactNativeBuildConfig,
)
from apkforge.services.analysis import ProjectAnalyzer
from apkforge.services.extraction import patterns
from apkforge.services.scaffolding import ScaffoldingSynthesizer, render_template


class TestRenderTemplate:
    """Tests for template selection by file name."""

    def test_app_and_project_gradle_differ(self):
        """Test that the app/ path selects the module-level Gradle body."""
        analysis = Analysis(
            framework=Framework.ANDROID,
            build_config=AndroidBuildConfig(target_sdk=34, min_sdk=24, package_name="com.example.demo"),
        )

        app_level = render_template("app/build.gradle", analysis)
        project_level = render_template("build.gradle", analysis)

        assert "applicationId \"com.example.demo\"" in app_level
        assert "minSdkVersion 24" in app_level
        assert "classpath 'com.android.tools.build:gradle:7.4.2'" in project_level
        assert app_level != project_level

    def test_manifest_is_readable_by_extractor_patterns(self):
        """Test that a rendered manifest round-trips through the pattern helpers."""
        analysis = Analysis(
            framework=Framework.REACT_NATIVE,
            build_config=ReactNativeBuildConfig(app_name="Round Trip", min_sdk=22, target_sdk=32),
        )

        manifest = render_template("android/app/src/main/AndroidManifest.xml", analysis)

        assert patterns.xml_attribute(manifest, "manifest", "package", "m").data == "com.reactnative.app"
        assert patterns.xml_attribute(manifest, "application", "android:label", "m").data == "Round Trip"
        assert 'android:minSdkVersion="22"' in manifest
        assert 'android:targetSdkVersion="32"' in manifest

    def test_unmatched_name_has_no_template(self):
        """Test that unknown file names are not rendered."""
        analysis = Analysis(framework=Framework.GENERIC_MOBILE)

        assert render_template("README.md", analysis) is None


@pytest.mark.asyncio
class TestScaffoldingSynthesizer:
    """Tests for writing missing files."""

    @pytest.mark.parametrize(
        "files",
        [
            {"package.json": '{"name": "x"}', "metro.config.js": ""},
            {"pubspec.yaml": "name: x\nversion: 1.0.0\n"},
            {"app/src/main/AndroidManifest.xml": "<manifest/>"},
            {"app/build.gradle": "android {}\n", "app/src/main/AndroidManifest.xml": "<manifest/>", "A.java": ""},
            {"www/config.xml": "<widget><name>x</name></widget>", "www/app.js": ""},
        ],
    )
    async def test_round_trip_leaves_nothing_missing(self, config, temp_dir, make_tree, files):
        """Test that synthesis followed by re-analysis reports no missing files."""
        root = make_tree(temp_dir / "project", files)
        analyzer = ProjectAnalyzer(config)
        before = await analyzer.analyze(root)
        assert before.missing_files

        ScaffoldingSynthesizer().synthesize(root, before)
        after = await analyzer.analyze(root)

        assert after.framework is before.framework
        assert after.missing_files == ()

    async def test_directory_entries_get_placeholder(self, config, temp_dir, make_tree):
        """Test that extension-less checklist entries become directories."""
        root = make_tree(
            temp_dir, {"config.xml": "<widget/>", "www/config.xml": "<widget/>", "www/index.html": ""}
        )
        analysis = await ProjectAnalyzer(config).analyze(root)

        written = ScaffoldingSynthesizer().synthesize(root, analysis)

        assert written == [root / "platforms" / "android" / ".gitkeep"]
        assert (root / "platforms" / "android").is_dir()

    async def test_idempotent(self, config, temp_dir, make_tree):
        """Test that a second run writes identical content."""
        root = make_tree(temp_dir, {"package.json": '{"name": "x"}', "metro.config.js": ""})
        analysis = await ProjectAnalyzer(config).analyze(root)
        synthesizer = ScaffoldingSynthesizer()

        first = {p: p.read_text() for p in synthesizer.synthesize(root, analysis)}
        second = {p: p.read_text() for p in synthesizer.synthesize(root, analysis)}

        assert first == second
        assert set(first) == {root / "android/build.gradle", root / "android/app/build.gradle"}

    async def test_existing_files_untouched(self, temp_dir):
        """Test that only missing paths are written."""
        (temp_dir / "package.json").write_text("original")
        analysis = Analysis(
            framework=Framework.REACT_NATIVE,
            missing_files=("android/build.gradle",),
            build_config=ReactNativeBuildConfig(has_package_json=True),
        )

        ScaffoldingSynthesizer().synthesize(temp_dir, analysis)

        assert (temp_dir / "package.json").read_text() == "original"
        assert (temp_dir / "android" / "build.gradle").is_file()
