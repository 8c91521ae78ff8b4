"""Tests for config directory, settings and profile file handling."""

import json
from pathlib import Path

import pytest
import yaml

from nettocalc.sdk.config import (
    ProfileNotFoundError,
    get_config_dir,
    get_profile_path,
    get_profile_value,
    get_setting,
    load_profile,
    load_settings,
    set_profile_value,
    set_setting,
    unset_profile_value,
)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    config = tmp_path / "config"
    monkeypatch.setenv("NETTO_CALC_CONFIG_PATH", str(config))
    return config


class TestConfigDir:

    def test_env_override(self, config_dir):
        assert get_config_dir() == config_dir

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NETTO_CALC_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "netto-calc"


class TestSettings:

    def test_missing_file_is_empty(self, config_dir):
        assert load_settings() == {}
        assert get_setting("default_output_format", "table") == "table"

    def test_set_creates_directory(self, config_dir):
        path = set_setting("default_output_format", "json")

        assert path == config_dir / "settings.json"
        assert json.loads(path.read_text()) == {"default_output_format": "json"}
        assert get_setting("default_output_format") == "json"


class TestProfile:

    def test_default_location(self, config_dir):
        assert get_profile_path() == config_dir / "profile.yaml"

    def test_custom_location_from_settings(self, config_dir, tmp_path):
        custom = tmp_path / "elsewhere" / "me.yaml"
        set_setting("profile", str(custom))

        assert get_profile_path() == custom
        set_profile_value("yearly_salary", 42000)
        assert yaml.safe_load(custom.read_text()) == {"yearly_salary": 42000}

    def test_required_but_missing(self, config_dir):
        with pytest.raises(ProfileNotFoundError, match="profile set"):
            load_profile(require_exists=True)

    def test_configured_but_missing(self, config_dir, tmp_path):
        set_setting("profile", str(tmp_path / "missing.yaml"))
        with pytest.raises(ProfileNotFoundError, match="configured path"):
            get_profile_path(require_exists=True)

    def test_missing_is_empty(self, config_dir):
        assert load_profile() == {}

    def test_set_get_unset(self, config_dir):
        set_profile_value("tax_class", 3)
        set_profile_value("state", "BY")
        assert get_profile_value("tax_class") == 3

        unset_profile_value("tax_class")
        assert load_profile() == {"state": "BY"}
        assert get_profile_value("tax_class", 1) == 1

    def test_unset_absent_key(self, config_dir):
        path = unset_profile_value("year")
        assert isinstance(path, Path)
        assert load_profile() == {}
