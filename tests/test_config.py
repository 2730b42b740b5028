"""Tests for patterndir.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from patterndir.config import (
    _atomic_write,
    _deep_merge,
    get_cache_dir,
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
)
from patterndir.exceptions import ConfigError
from patterndir.models import DEFAULT_API_URL, CacheConfig, DirectoryConfig, GlobalConfig, OutputConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPathsLinux:
    """XDG paths on Linux (the default XDG platform)."""

    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("patterndir.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "patterndir"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("patterndir.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "patterndir"

    def test_cache_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("patterndir.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_cache_dir()
        assert result == tmp_path / ".cache" / "patterndir"
        assert result.is_dir()

    def test_data_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_data"
        monkeypatch.setattr("patterndir.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(custom))

        assert get_data_dir() == custom / "patterndir"


class TestXDGPathsFallback:
    """Fallback paths on non-XDG platforms (macOS, Windows)."""

    def test_config_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("patterndir.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir() == tmp_path / ".patterndir"

    def test_cache_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("patterndir.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_cache_dir() == tmp_path / ".patterndir" / "cache"

    def test_data_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("patterndir.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_data_dir() == tmp_path / ".patterndir" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        _atomic_write(target, '{"a": 1}')
        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "out.json"
        _atomic_write(target, "x")
        assert target.is_file()

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        with patch("patterndir.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                _atomic_write(target, "data")
        assert not target.exists()
        assert os.listdir(tmp_path) == []


# ---------------------------------------------------------------------------
# Global and project config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_load_returns_defaults_when_missing(self, isolated_config: Path) -> None:
        config = load_global_config()
        assert config.directory.api_url == DEFAULT_API_URL
        assert config.cache.ttl_seconds == 3600

    def test_save_and_load_roundtrip(self, isolated_config: Path) -> None:
        config = GlobalConfig(
            directory=DirectoryConfig(locale="fr_FR"),
            cache=CacheConfig(ttl_seconds=60),
        )
        save_global_config(config)

        loaded = load_global_config()
        assert loaded.directory.locale == "fr_FR"
        assert loaded.cache.ttl_seconds == 60

    def test_saved_config_is_valid_json(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig())
        path = isolated_config / "config" / "patterndir" / "config.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["directory"]["api_url"] == DEFAULT_API_URL

    def test_load_invalid_json_raises_config_error(self, isolated_config: Path) -> None:
        path = isolated_config / "config" / "patterndir" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_global_config()

    def test_load_invalid_schema_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "patterndir" / "config.json",
            {"cache": {"ttl_seconds": "forever"}},
        )
        with pytest.raises(ConfigError):
            load_global_config()


class TestProjectConfig:
    def test_load_returns_none_when_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_load_valid_project_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "patterndir.json", {"directory": {"locale": "de_DE"}})
        assert load_project_config() == {"directory": {"locale": "de_DE"}}

    def test_non_object_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "patterndir.json", ["not", "an", "object"])
        with pytest.raises(ConfigError):
            load_project_config()

    def test_deep_merge(self) -> None:
        base = {"directory": {"locale": "en_US", "wp_version": "6.4"}, "cache": {"enabled": True}}
        overlay = {"directory": {"locale": "de_DE"}}
        assert _deep_merge(base, overlay) == {
            "directory": {"locale": "de_DE", "wp_version": "6.4"},
            "cache": {"enabled": True},
        }


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    @pytest.fixture(autouse=True)
    def _isolated(self, isolated_config: Path) -> None:
        self.root = isolated_config

    def _save_user(self, **directory: Any) -> None:
        save_global_config(GlobalConfig(directory=DirectoryConfig(**directory)))

    def test_defaults(self) -> None:
        config = resolve_config()
        assert config.directory.api_url == DEFAULT_API_URL
        assert config.directory.locale == "en_US"

    def test_user_config_applies(self) -> None:
        self._save_user(locale="fr_FR")
        assert resolve_config().directory.locale == "fr_FR"

    def test_project_overrides_user(self) -> None:
        self._save_user(locale="fr_FR", wp_version="6.3")
        _write_json(self.root / "patterndir.json", {"directory": {"locale": "de_DE"}})

        config = resolve_config()
        assert config.directory.locale == "de_DE"
        assert config.directory.wp_version == "6.3"

    def test_invalid_project_config_raises(self) -> None:
        _write_json(self.root / "patterndir.json", {"request": {"timeout": "slow"}})
        with pytest.raises(ConfigError):
            resolve_config()

    def test_env_overrides_project(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(self.root / "patterndir.json", {"directory": {"locale": "de_DE"}})
        monkeypatch.setenv("PATTERNDIR_LOCALE", "es_ES")
        monkeypatch.setenv("PATTERNDIR_API_URL", "https://mirror.example.com/patterns/")

        config = resolve_config()
        assert config.directory.locale == "es_ES"
        assert config.directory.api_url == "https://mirror.example.com/patterns/"

    def test_cli_overrides_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATTERNDIR_LOCALE", "es_ES")
        monkeypatch.setenv("PATTERNDIR_API_URL", "https://env.example.com/")

        config = resolve_config(cli_api_url="https://cli.example.com/", cli_locale="it_IT")
        assert config.directory.locale == "it_IT"
        assert config.directory.api_url == "https://cli.example.com/"

    def test_cli_format_overrides_user(self) -> None:
        save_global_config(GlobalConfig(output=OutputConfig(format="plain")))
        assert resolve_config().output.format == "plain"
        assert resolve_config(cli_format="json").output.format == "json"

    def test_unknown_output_format_raises(self) -> None:
        _write_json(self.root / "patterndir.json", {"output": {"format": "xml"}})
        with pytest.raises(ConfigError):
            resolve_config()
