"""
Configuration Module

Architectural Intent:
- Loads registry-wide dispatcher settings from a JSON file
- Environment variables override file-based values
- Falls back to defaults when the file is absent or unreadable

Design Decisions:
- Config is a frozen dataclass; nested sections map to sub-dataclasses
- Env keys follow HERALD_SECTION_KEY, split on the first underscore only,
  so HERALD_REPLAY_BUFFER_SIZE addresses replay.buffer_size
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayConfig:
    """Replay buffer defaults applied to every channel."""
    enabled: bool = True
    buffer_size: int = 1


@dataclass(frozen=True)
class WarningsConfig:
    """Diagnostic warning toggles."""
    no_listeners: bool = True


@dataclass(frozen=True)
class HeraldConfig:
    """Root configuration for a herald registry."""
    enabled: bool = True
    replay: ReplayConfig = field(default_factory=ReplayConfig)
    warnings: WarningsConfig = field(default_factory=WarningsConfig)
    log_level: str = "WARNING"


def _env_override(data: dict, prefix: str = "HERALD") -> dict:
    """Override config values with environment variables.

    For example: HERALD_REPLAY_ENABLED=false, HERALD_WARNINGS_NO_LISTENERS=0
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) == 2 and parts[0] in ("replay", "warnings"):
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data[key[len(prefix) + 1:].lower()] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _coerce(type_name: str, value):
    if not isinstance(value, str):
        return value
    if type_name == "int":
        return int(value)
    if type_name == "bool":
        return value.lower() in ("true", "1", "yes")
    return value


def _build_sub_config(cls, data: dict):
    """Build a config dataclass from a dict, ignoring unknown keys."""
    valid = {f.name: f.type for f in fields(cls)}
    filtered = {
        k: _coerce(valid[k], v) for k, v in data.items() if k in valid
    }
    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "HERALD",
) -> HeraldConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (HERALD_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to herald.json in CWD.
        env_prefix: Environment variable prefix. Defaults to HERALD.
    """
    config_path = Path(path) if path else Path("herald.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return HeraldConfig(
        enabled=_coerce("bool", data.get("enabled", True)),
        replay=_build_sub_config(ReplayConfig, data.get("replay", {})),
        warnings=_build_sub_config(WarningsConfig, data.get("warnings", {})),
        log_level=str(data.get("log_level", "WARNING")).upper(),
    )
