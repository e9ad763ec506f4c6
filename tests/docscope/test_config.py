"""Tests for docscope.config module."""

from pathlib import Path

import pytest

from docscope.config import (
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
    ENV_PKG_PATTERN,
    ENV_ROOT_DIR,
    load_settings,
    resolve_root_dir,
    resolve_selector,
)
from docscope.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without docscope environment variables."""
    for name in (ENV_ROOT_DIR, ENV_PKG_PATTERN, ENV_LOG_LEVEL, ENV_LOG_FORMAT):
        monkeypatch.delenv(name, raising=False)


class TestRootDir:
    """Test root directory precedence."""

    def test_default_is_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_root_dir() == Path.cwd()

    def test_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_ROOT_DIR, str(tmp_path))
        assert resolve_root_dir() == tmp_path.resolve()

    def test_argument_beats_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_ROOT_DIR, str(tmp_path / "env"))
        assert resolve_root_dir(str(tmp_path / "cli")) == (tmp_path / "cli").resolve()


class TestSelector:
    """Test package selector precedence."""

    def test_default_selects_everything(self):
        assert resolve_selector() is None

    def test_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_PKG_PATTERN, "sample...")
        assert resolve_selector() == "sample..."

    def test_argument_beats_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_PKG_PATTERN, "sample...")
        assert resolve_selector("other") == "other"


class TestLoadSettings:
    """Test full settings resolution."""

    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = load_settings()
        assert settings.root_dir == Path.cwd()
        assert settings.selector is None
        assert settings.log_level == "INFO"
        assert settings.log_format == "structured"

    def test_log_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
        monkeypatch.setenv(ENV_LOG_FORMAT, "JSON")
        settings = load_settings()
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    def test_invalid_level(self):
        with pytest.raises(ConfigurationError, match="log_level"):
            load_settings(log_level="loud")

    def test_invalid_format(self):
        with pytest.raises(ConfigurationError, match="log_format"):
            load_settings(log_format="xml")
