"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import toml

from doctracker.config import DEFAULT_CONFIG, get_db_path, load_config, write_default_config


class TestLoadConfig:
    """Config files are merged over defaults."""

    def test_missing_file_returns_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_config(Path(tmpdir) / "missing.toml")
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_partial_file_merged(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.toml"
            path.write_text('[user]\nid = "u-7"\nis_admin = true\n\n[stats]\ntop_limit = 3\n')

            config = load_config(path)

        assert config["user"]["id"] == "u-7"
        assert config["user"]["is_admin"] is True
        assert config["user"]["name"] == DEFAULT_CONFIG["user"]["name"]
        assert config["stats"]["top_limit"] == 3
        assert config["stats"]["default_range"] == "1w"

    def test_invalid_toml_returns_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.toml"
            path.write_text("[user\nid = ")
            assert load_config(path) == DEFAULT_CONFIG

    def test_write_default_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_default_config(Path(tmpdir) / "nested" / "config.toml")
            assert toml.load(path) == DEFAULT_CONFIG

    def test_db_path_expands_home(self):
        config = {"storage": {"db_path": "~/tracker.db"}}
        assert get_db_path(config) == Path.home() / "tracker.db"
