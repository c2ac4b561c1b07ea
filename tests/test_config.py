"""Tests for config.py - settings discovery and merging."""

from pathlib import Path

import pytest

from omst import config as omst_config
from omst.config import OmstConfig, load_config
from omst.exceptions import ConfigurationError, InvalidConfigError
from omst.login_defs import LOGIN_DEFS


class TestOmstConfig:
    """Defaults and validation."""

    def test_defaults(self):
        config = OmstConfig()
        assert config.login_defs == Path("/etc/login.defs")
        assert config.login_defs is LOGIN_DEFS
        assert config.on_error == "fail"
        assert config.verbosity == "normal"
        assert config.log_file is None
        assert not config.degrade_on_error

    def test_string_path_coerced(self):
        assert OmstConfig(login_defs="/opt/login.defs").login_defs == Path("/opt/login.defs")

    def test_invalid_on_error(self):
        with pytest.raises(InvalidConfigError) as exc:
            OmstConfig(on_error="explode")
        assert exc.value.key == "on_error"

    def test_invalid_verbosity(self):
        with pytest.raises(InvalidConfigError):
            OmstConfig(verbosity="loud")

    def test_frozen(self):
        config = OmstConfig()
        with pytest.raises(AttributeError):
            config.on_error = "unknown"


class TestLoadConfig:
    """Merging of files, environment and overrides."""

    def test_no_sources(self):
        assert load_config() == OmstConfig()

    def test_global_file(self, tmp_path, monkeypatch):
        global_file = tmp_path / "global.toml"
        global_file.write_text('on_error = "unknown"\nlogin_defs = "/srv/login.defs"\n')
        monkeypatch.setattr(omst_config, "GLOBAL_CONFIG", global_file)

        config = load_config()
        assert config.degrade_on_error
        assert config.login_defs == Path("/srv/login.defs")

    def test_explicit_file_beats_global(self, tmp_path, monkeypatch):
        global_file = tmp_path / "global.toml"
        global_file.write_text('on_error = "unknown"\n')
        monkeypatch.setattr(omst_config, "GLOBAL_CONFIG", global_file)
        explicit = tmp_path / "omst.toml"
        explicit.write_text('on_error = "fail"\n')

        assert load_config(config_file=explicit).on_error == "fail"

    def test_env_beats_files(self, tmp_path, monkeypatch):
        explicit = tmp_path / "omst.toml"
        explicit.write_text('verbosity = "quiet"\n')
        monkeypatch.setenv("OMST_VERBOSITY", "verbose")
        monkeypatch.setenv("OMST_LOGIN_DEFS", "/env/login.defs")

        config = load_config(config_file=explicit)
        assert config.verbosity == "verbose"
        assert config.login_defs == Path("/env/login.defs")

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("OMST_ON_ERROR", "unknown")
        assert load_config(on_error="fail").on_error == "fail"

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("OMST_ON_ERROR", "unknown")
        assert load_config(on_error=None, login_defs=None).on_error == "unknown"

    def test_verbose_and_quiet_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc:
            load_config(config_file=tmp_path / "nope.toml")
        assert "not found" in str(exc.value)

    def test_malformed_toml(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("on_error = \n")
        with pytest.raises(ConfigurationError) as exc:
            load_config(config_file=bad)
        assert exc.value.path == bad

    def test_unknown_key(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text('colour = "blue"\n')
        with pytest.raises(ConfigurationError):
            load_config(config_file=bad)

    def test_empty_env_value(self, monkeypatch):
        monkeypatch.setenv("OMST_LOG_FILE", "")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("OMST_ON_ERROR", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()
