"""Tests for configuration module."""

import json
import os
import pytest
from unittest.mock import patch

from herald.infrastructure.config import (
    HeraldConfig,
    ReplayConfig,
    WarningsConfig,
    load_config,
)


class TestDefaultConfig:
    def test_defaults(self):
        config = load_config(path="/nonexistent/herald.json")
        assert config.enabled is True
        assert config.log_level == "WARNING"
        assert config.replay.enabled is True
        assert config.replay.buffer_size == 1
        assert config.warnings.no_listeners is True

    def test_all_sections_present(self):
        config = load_config(path="/nonexistent/herald.json")
        assert isinstance(config, HeraldConfig)
        assert isinstance(config.replay, ReplayConfig)
        assert isinstance(config.warnings, WarningsConfig)


class TestFileConfig:
    def test_load_from_file(self, tmp_path):
        config_file = tmp_path / "herald.json"
        config_file.write_text(json.dumps({
            "enabled": False,
            "log_level": "debug",
            "replay": {"enabled": False, "buffer_size": 5},
            "warnings": {"no_listeners": False},
        }))

        config = load_config(path=str(config_file))
        assert config.enabled is False
        assert config.log_level == "DEBUG"
        assert config.replay.enabled is False
        assert config.replay.buffer_size == 5
        assert config.warnings.no_listeners is False

    def test_partial_config(self, tmp_path):
        config_file = tmp_path / "herald.json"
        config_file.write_text(json.dumps({"replay": {"buffer_size": 3}}))

        config = load_config(path=str(config_file))
        assert config.replay.buffer_size == 3
        assert config.replay.enabled is True
        assert config.warnings.no_listeners is True

    def test_invalid_json_returns_defaults(self, tmp_path):
        config_file = tmp_path / "herald.json"
        config_file.write_text("not valid json{{{")

        config = load_config(path=str(config_file))
        assert config.replay.buffer_size == 1

    def test_unknown_keys_ignored(self, tmp_path):
        config_file = tmp_path / "herald.json"
        config_file.write_text(json.dumps({
            "replay": {"buffer_size": 2, "unknown_key": "ignored"},
        }))

        config = load_config(path=str(config_file))
        assert config.replay.buffer_size == 2


class TestEnvOverride:
    def test_env_overrides_file(self, tmp_path):
        config_file = tmp_path / "herald.json"
        config_file.write_text(json.dumps({"replay": {"buffer_size": 3}}))

        with patch.dict(os.environ, {"HERALD_REPLAY_BUFFER_SIZE": "7"}):
            config = load_config(path=str(config_file))

        assert config.replay.buffer_size == 7

    def test_env_bool_conversion(self):
        env = {
            "HERALD_REPLAY_ENABLED": "false",
            "HERALD_WARNINGS_NO_LISTENERS": "0",
            "HERALD_ENABLED": "no",
        }
        with patch.dict(os.environ, env):
            config = load_config(path="/nonexistent/herald.json")

        assert config.replay.enabled is False
        assert config.warnings.no_listeners is False
        assert config.enabled is False

    def test_env_log_level(self):
        with patch.dict(os.environ, {"HERALD_LOG_LEVEL": "info"}):
            config = load_config(path="/nonexistent/herald.json")

        assert config.log_level == "INFO"

    def test_custom_prefix(self):
        with patch.dict(os.environ, {"MYAPP_REPLAY_BUFFER_SIZE": "4"}):
            config = load_config(path="/nonexistent/herald.json", env_prefix="MYAPP")

        assert config.replay.buffer_size == 4


class TestConfigImmutability:
    def test_frozen(self):
        config = load_config(path="/nonexistent/herald.json")
        with pytest.raises(AttributeError):
            config.log_level = "DEBUG"

    def test_sub_config_frozen(self):
        config = load_config(path="/nonexistent/herald.json")
        with pytest.raises(AttributeError):
            config.replay.buffer_size = 9
