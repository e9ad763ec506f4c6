"""Tests for docscope.loader module."""

import pytest

from docscope.exceptions import LoadError, NotFoundError, PackageNotFoundError
from docscope.loader import (
    PackageIndex,
    load,
    matches_selector,
    module_import_path,
    normalize_selector,
    source_root,
)


class TestLoad:
    """Test loading a project tree."""

    def test_loads_importable_modules(self, sample_project):
        index = load(sample_project)

        assert [pkg.import_path for pkg in index.all_packages()] == [
            "sample",
            "sample.geometry",
            "sample.values",
        ]

    def test_test_sources_and_hidden_dirs_are_skipped(self, sample_project):
        index = load(sample_project)

        assert "sample.test_geometry" not in index
        assert "sample.tests.helpers" not in index
        assert "conftest" not in index
        assert len(index) == 3

    def test_broken_module_is_skipped(self, sample_project):
        index = load(sample_project)
        assert "sample.broken" not in index

    def test_round_trip_identity(self, sample_project):
        """Every loaded package is returned by its own import path."""
        index = load(sample_project)
        for package in index.all_packages():
            assert index.get_package(package.import_path) is package

    def test_unknown_package_raises_not_found(self, sample_project):
        index = load(sample_project)
        with pytest.raises(PackageNotFoundError) as exc_info:
            index.get_package("sample.missing")
        assert isinstance(exc_info.value, NotFoundError)
        assert "sample.missing" in str(exc_info.value)

    def test_package_name_is_last_segment(self, sample_project):
        package = load(sample_project).get_package("sample.geometry")
        assert package.name == "geometry"
        assert len(package.files) == 1
        assert "Point" in package.scope

    def test_root_inside_package_uses_source_root(self, sample_project):
        index = load(sample_project / "sample")
        assert "sample.geometry" in index

    def test_empty_root_loads_nothing(self, tmp_path):
        index = load(tmp_path)
        assert isinstance(index, PackageIndex)
        assert len(index) == 0


class TestLoadErrors:
    """Test fatal loading failures."""

    def test_missing_root(self, tmp_path):
        with pytest.raises(LoadError, match="does not exist"):
            load(tmp_path / "nope")

    def test_root_is_a_file(self, tmp_path):
        path = tmp_path / "module.py"
        path.write_text("x = 1\n")
        with pytest.raises(LoadError, match="not a directory"):
            load(path)

    def test_nothing_parses(self, tmp_path, make_tree):
        make_tree(tmp_path, {"bad.py": "def (:\n", "worse.py": "class\n"})
        with pytest.raises(LoadError, match="could be parsed"):
            load(tmp_path)


class TestSelector:
    """Test package selection patterns."""

    def test_exact_selector(self, sample_project):
        index = load(sample_project, "sample.geometry")
        assert [pkg.import_path for pkg in index.all_packages()] == ["sample.geometry"]

    def test_recursive_selector(self, sample_project):
        index = load(sample_project, "sample...")
        assert len(index) == 3

    def test_path_style_selector(self, sample_project):
        index = load(sample_project, "./sample/...")
        assert len(index) == 3

    def test_glob_selector(self, sample_project):
        index = load(sample_project, "sample.*")
        assert [pkg.import_path for pkg in index.all_packages()] == [
            "sample.geometry",
            "sample.values",
        ]

    def test_selector_matching_nothing_is_empty(self, sample_project):
        assert len(load(sample_project, "other...")) == 0

    @pytest.mark.parametrize(
        ("import_path", "selector", "expected"),
        [
            ("sample", None, True),
            ("sample", "sample...", True),
            ("sample.geometry", "sample...", True),
            ("samples", "sample...", False),
            ("anything", "...", True),
            ("sample.geometry", "sample", False),
        ],
    )
    def test_matches_selector(self, import_path, selector, expected):
        assert matches_selector(import_path, selector) is expected

    def test_normalize_selector(self):
        assert normalize_selector("./sample/geometry.py") == "sample.geometry"
        assert normalize_selector("sample/...") == "sample...."


class TestImportPaths:
    """Test import path computation."""

    def test_package_init_maps_to_package(self, tmp_path):
        assert module_import_path(tmp_path / "pkg" / "__init__.py", tmp_path) == "pkg"

    def test_nested_module(self, tmp_path):
        path = tmp_path / "pkg" / "sub" / "mod.py"
        assert module_import_path(path, tmp_path) == "pkg.sub.mod"

    def test_non_identifier_is_not_importable(self, tmp_path):
        assert module_import_path(tmp_path / "my-script.py", tmp_path) is None

    def test_source_root_walks_up_packages(self, tmp_path, make_tree):
        make_tree(tmp_path, {"pkg/__init__.py": "", "pkg/sub/__init__.py": ""})
        assert source_root(tmp_path / "pkg" / "sub") == tmp_path
