#!/usr/bin/env python3
"""Tests for YAML configuration loading."""

import pytest

from fleet import ConfigError
from fleet.config import Config, load_config, load_schema


class TestLoadSchema:
    """Tests for load_schema."""

    def test_schema_loads(self):
        schema = load_schema()
        assert schema["type"] == "object"
        assert "dataFile" in schema["properties"]


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == Config()

    def test_default_file_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "fleetguard.yaml").write_text("dataFile: depot.txt\n")
        config = load_config()
        assert config.data_file == "depot.txt"
        assert config.report_file == "fleet_report.csv"

    def test_all_keys(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "dataFile: a.txt\nreportFile: b.csv\ncolor: false\nlogLevel: DEBUG\n"
        )
        config = load_config(config_file)
        assert config == Config(
            data_file="a.txt", report_file="b.csv", color=False, log_level="DEBUG"
        )

    def test_empty_file_gives_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_config(config_file) == Config()

    def test_unknown_key_rejected(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("dueSoonKm: 1000\n")
        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_wrong_type_rejected(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("color: maybe\n")
        with pytest.raises(ConfigError) as excinfo:
            load_config(config_file)
        assert "color" in excinfo.value.message

    def test_bad_log_level_rejected(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logLevel: LOUD\n")
        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_yaml_error(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("dataFile: [unclosed\n")
        with pytest.raises(ConfigError) as excinfo:
            load_config(config_file)
        assert "YAML parse error" in excinfo.value.message

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.yaml")
