"""Tests for Library Records configuration.

These tests demonstrate:
1. Default value behavior
2. Environment variable loading
3. Configuration validation
4. The global configuration singleton
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from library_records.config import LibraryConfig, get_config, reset_config


class TestLibraryConfig:
    """Test configuration behavior."""

    def test_default_configuration(self, clean_env, tmp_path, monkeypatch):
        """Defaults point at three JSON files under ./data."""
        monkeypatch.chdir(tmp_path)
        config = LibraryConfig(_env_file=None)

        assert config.data_dir == (tmp_path / "data").absolute()
        assert config.data_dir.is_dir()
        assert config.books_path == config.data_dir / "books.json"
        assert config.readers_path == config.data_dir / "readers.json"
        assert config.loans_path == config.data_dir / "loans.json"
        assert config.json_indent == 4
        assert config.isolate_load_failures is False
        assert config.log_level == "INFO"
        assert config.is_development is False

    def test_environment_variable_loading(self, clean_env, tmp_path):
        env_vars = {
            "LIBRARY_RECORDS_DATA_DIR": str(tmp_path / "library"),
            "LIBRARY_RECORDS_BOOKS_FILE": "catalog.json",
            "LIBRARY_RECORDS_ISOLATE_LOAD_FAILURES": "true",
            "LIBRARY_RECORDS_LOG_LEVEL": "debug",
            "LIBRARY_RECORDS_JSON_INDENT": "2",
        }

        with patch.dict(os.environ, env_vars):
            config = LibraryConfig(_env_file=None)

            assert config.data_dir == tmp_path / "library"
            assert config.books_path == tmp_path / "library" / "catalog.json"
            assert config.isolate_load_failures is True
            assert config.log_level == "DEBUG"
            assert config.json_indent == 2
            assert config.is_development is True

    def test_log_level_validation(self, data_dir: Path):
        for level in ["DEBUG", "INFO", "WARNING", "ERROR"]:
            assert LibraryConfig(data_dir=data_dir, log_level=level).log_level == level

        for level in ["TRACE", "verbose", ""]:
            with pytest.raises(ValidationError):
                LibraryConfig(data_dir=data_dir, log_level=level)

    def test_file_name_validation(self, data_dir: Path):
        """Collection files are plain names inside data_dir."""
        assert LibraryConfig(data_dir=data_dir, loans_file="loans-2024.json").loans_file

        for name in ["../escape.json", "sub/dir.json", ""]:
            with pytest.raises(ValidationError):
                LibraryConfig(data_dir=data_dir, loans_file=name)

    def test_json_indent_bounds(self, data_dir: Path):
        with pytest.raises(ValidationError):
            LibraryConfig(data_dir=data_dir, json_indent=-1)
        with pytest.raises(ValidationError):
            LibraryConfig(data_dir=data_dir, json_indent=9)

    def test_data_dir_is_created(self, tmp_path: Path):
        target = tmp_path / "nested" / "data"
        config = LibraryConfig(data_dir=target)

        assert config.data_dir == target
        assert target.is_dir()

    def test_debug_means_development(self, data_dir: Path):
        assert LibraryConfig(data_dir=data_dir, debug=True).is_development is True


class TestConfigSingleton:
    def test_get_config_returns_same_instance(self, clean_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        reset_config()
        try:
            assert get_config() is get_config()
        finally:
            reset_config()

    def test_reset_config_creates_new_instance(self, clean_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        reset_config()
        try:
            first = get_config()
            reset_config()
            assert get_config() is not first
        finally:
            reset_config()
