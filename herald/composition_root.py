"""
Composition Root

Architectural Intent:
- Single place where configuration, logging and the registry are wired
- Each Channel stays independently constructible; only the registry is built here
"""

import logging
from dataclasses import dataclass
from typing import Optional

from herald.application.registry import Herald
from herald.infrastructure.config import HeraldConfig, load_config
from herald.infrastructure.logging import configure_logging


@dataclass
class HeraldContainer:
    """DI container holding the loaded config and the wired registry."""

    config: HeraldConfig
    registry: Herald


def create_container(
    config: Optional[HeraldConfig] = None,
    json_logs: bool = False,
) -> HeraldContainer:
    """Create and wire a registry from ``config`` (loaded from disk/env if omitted)."""
    if config is None:
        config = load_config()

    configure_logging(
        level=getattr(logging, config.log_level, logging.WARNING),
        json_format=json_logs,
    )

    registry = Herald(
        enabled=config.enabled,
        replay=config.replay.enabled,
        replay_buffer_size=config.replay.buffer_size,
        no_listeners_warning=config.warnings.no_listeners,
    )
    return HeraldContainer(config=config, registry=registry)
