"""Test configuration for APKForge."""

import json
import tempfile
import zipfile
from pathlib import Path

import pytest


def write_files(root: Path, files: dict) -> Path:
    """Write a mapping of relative path to text content below ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_tree():
    """Return the helper that writes a file mapping into a directory."""
    return write_files


@pytest.fixture
def config(temp_dir):
    """Configuration isolated from the environment, storing under ``temp_dir``."""
    from apkforge.core.config import Config, StorageConfig

    return Config(storage=StorageConfig(base_path=temp_dir / "store"))


@pytest.fixture
def react_native_project(temp_dir):
    """A React Native tree with its Android host project."""
    package_json = {
        "name": "awesome-app",
        "displayName": "Awesome App",
        "version": "2.3.1",
        "dependencies": {"react": "18.2.0", "react-native": "0.72.0", "axios": "1.6.0"},
    }
    return write_files(
        temp_dir / "rn",
        {
            "package.json": json.dumps(package_json),
            "index.js": "import {AppRegistry} from 'react-native';\n",
            "App.tsx": "export default function App() { return null; }\n",
            "metro.config.js": "module.exports = {};\n",
            "android/build.gradle": "buildscript {}\n",
            "android/app/build.gradle": (
                "android {\n"
                "    defaultConfig {\n"
                '        applicationId "com.awesome.app"\n'
                "        minSdkVersion 23\n"
                "        targetSdkVersion 34\n"
                '        versionName "9.9.9"\n'
                "    }\n"
                "}\n"
            ),
        },
    )


@pytest.fixture
def flutter_project(temp_dir):
    """A Flutter tree with a couple of bundled assets."""
    return write_files(
        temp_dir / "flutter",
        {
            "pubspec.yaml": (
                "name: shiny_app\n"
                "description: A Flutter app.\n"
                "version: 1.4.0+12\n"
                "\n"
                "dependencies:\n"
                "  flutter:\n"
                "    sdk: flutter\n"
                "  http: ^1.1.0\n"
                "\n"
                "dev_dependencies:\n"
                "  flutter_test:\n"
                "    sdk: flutter\n"
            ),
            "lib/main.dart": "void main() {}\n",
            "lib/home.dart": "class Home {}\n",
            "assets/logo.txt": "logo",
            "assets/data/config.json": "{}",
        },
    )


@pytest.fixture
def generic_project(temp_dir):
    """A web-style project holding nothing but an index page."""
    return write_files(
        temp_dir / "web",
        {"index.html": "<html><head><title>My Web App</title></head><body></body></html>"},
    )


@pytest.fixture
def project_archive(temp_dir, react_native_project):
    """The React Native fixture zipped inside a wrapping directory."""
    archive_path = temp_dir / "awesome.zip"
    with zipfile.ZipFile(archive_path, "w") as zf:
        for path in sorted(react_native_project.rglob("*")):
            if path.is_file():
                zf.write(path, f"awesome/{path.relative_to(react_native_project).as_posix()}")
    return archive_path


@pytest.fixture
def storage(temp_dir):
    """Create a storage backend for testing.

    Returns:
        LocalStorageBackend: A local storage backend instance configured
            to use the temporary directory.
    """
    from apkforge.storage import LocalStorageBackend

    return LocalStorageBackend(temp_dir / "records")
