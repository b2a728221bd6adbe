"""Unit tests for the file-tree walker."""

from apkforge.services.scanner import list_project_files


class TestListProjectFiles:
    """Tests for project file listing."""

    def test_lists_relative_posix_paths_sorted(self, temp_dir, make_tree):
        """Test that files come back relative to the root, sorted, with / separators."""
        make_tree(temp_dir, {"b.txt": "", "a/c.txt": "", "a/d/e.txt": ""})

        assert list_project_files(temp_dir) == ["a/c.txt", "a/d/e.txt", "b.txt"]

    def test_skips_ignored_directories(self, temp_dir, make_tree):
        """Test that dependency caches and build outputs are not walked."""
        make_tree(
            temp_dir,
            {
                "index.js": "",
                "node_modules/react/index.js": "",
                ".git/HEAD": "",
                "build/outputs/apk/release/app-release.apk": "",
            },
        )

        assert list_project_files(temp_dir) == ["index.js"]

    def test_custom_ignored_directories(self, temp_dir, make_tree):
        """Test overriding the ignored directory names."""
        make_tree(temp_dir, {"keep/a.txt": "", "skip/b.txt": "", "node_modules/c.js": ""})

        files = list_project_files(temp_dir, ignored_directories=["skip"])

        assert files == ["keep/a.txt", "node_modules/c.js"]

    def test_depth_limit(self, temp_dir, make_tree):
        """Test that recursion stops at the configured depth."""
        make_tree(temp_dir, {"root.txt": "", "one/a.txt": "", "one/two/b.txt": ""})

        assert list_project_files(temp_dir, max_depth=1) == ["one/a.txt", "root.txt"]
        assert list_project_files(temp_dir, max_depth=0) == ["root.txt"]

    def test_missing_root_yields_empty_list(self, temp_dir):
        """Test that a non-existent root is not an error."""
        assert list_project_files(temp_dir / "nope") == []

    def test_empty_directories_contribute_nothing(self, temp_dir):
        """Test that directories themselves are never listed."""
        (temp_dir / "empty" / "nested").mkdir(parents=True)

        assert list_project_files(temp_dir) == []
