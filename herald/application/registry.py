"""
Channel Registry

Architectural Intent:
- Owns the name -> Channel mapping and is its single source of truth
- Creates channels lazily on first emit, subscription or middleware use
- Destroys a channel once a removal leaves it without subscribers
- Cascades global settings to every live channel at the moment they change
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from herald.domain.entities.channel import Channel, Listener
from herald.domain.entities.handles import ListenerHandle, MiddlewareHandle
from herald.domain.errors import BufferSizeNotValidError, ReplayNotEnabledError
from herald.domain.ports.logger_port import LoggerPort
from herald.domain.services.emission import Middleware
from herald.domain.value_objects.channel_config import ChannelConfig

logger = logging.getLogger(__name__)


class Herald:
    """Named-event dispatcher holding one Channel per event name.

    Args:
        enabled: When False, emit() is a no-op.
        replay: Whether new and existing channels keep a replay buffer.
        replay_buffer_size: Default replay capacity for channels.
        no_listeners_warning: Warn when emitting on a channel nobody listens to.
        sink: Logger sink handed to every channel.
    """

    def __init__(
        self,
        enabled: bool = True,
        replay: bool = True,
        replay_buffer_size: int = 1,
        no_listeners_warning: bool = True,
        sink: Optional[LoggerPort] = None,
    ) -> None:
        if replay_buffer_size < 1:
            raise BufferSizeNotValidError(replay_buffer_size)
        self._enabled = enabled
        self._replay_enabled = replay
        self._replay_buffer_size = replay_buffer_size
        self._no_listeners_warning = no_listeners_warning
        self._logger: LoggerPort = sink or logger
        self._channels: dict[str, Channel] = {}

    # Enabled flag

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    # Channel lifecycle

    def get_channel(self, name: str) -> Channel:
        channel = self._channels.get(name)
        if channel is None:
            channel = self._make_channel(name)
            self._channels[name] = channel
            logger.debug("Created channel '%s'", name)
        return channel

    def has_channel(self, name: str) -> bool:
        return name in self._channels

    def channel_names(self) -> list[str]:
        return list(self._channels)

    def remove_channel(self, name: str) -> None:
        if self._channels.pop(name, None) is not None:
            logger.debug("Removed channel '%s'", name)

    def _make_channel(self, name: str) -> Channel:
        config = ChannelConfig(
            name=name,
            replay=self._replay_enabled,
            replay_buffer_size=self._replay_buffer_size,
            no_listeners_warning=self._no_listeners_warning,
        )
        return Channel(config, sink=self._logger, on_drained=self._on_channel_drained)

    def _on_channel_drained(self, channel: Channel) -> None:
        # A stale channel must not evict a newer one registered under its name
        if self._channels.get(channel.name) is channel:
            self.remove_channel(channel.name)

    # Emission and registration

    def emit(self, name: str, *args: Any) -> None:
        if not self._enabled:
            return
        self.get_channel(name).publish(*args)

    def on(self, name: str, listener: Listener) -> ListenerHandle:
        return self.get_channel(name).subscribe(listener)

    def remove_listener(self, name: str, listener: Listener) -> None:
        channel = self._channels.get(name)
        if channel is not None:
            channel.unsubscribe(listener)

    def remove_all_listeners(self, name: str) -> None:
        channel = self._channels.get(name)
        if channel is not None:
            channel.clear_listeners()

    def use_middleware(self, name: str, middleware: Middleware) -> MiddlewareHandle:
        return self.get_channel(name).add_middleware(middleware)

    def remove_middleware(self, name: str, middleware: Middleware) -> None:
        channel = self._channels.get(name)
        if channel is not None:
            channel.remove_middleware(middleware)

    # Cascading settings

    def set_logger(self, sink: LoggerPort) -> None:
        self._logger = sink
        for channel in self._channels.values():
            channel.set_logger(sink)

    def enable_no_listeners_warning(self) -> None:
        if self._no_listeners_warning:
            return
        self._no_listeners_warning = True
        for channel in self._channels.values():
            channel.enable_no_listeners_warning()

    def disable_no_listeners_warning(self) -> None:
        if not self._no_listeners_warning:
            return
        self._no_listeners_warning = False
        for channel in self._channels.values():
            channel.disable_no_listeners_warning()

    def replay_is_enabled(self) -> bool:
        return self._replay_enabled

    def enable_replay(self) -> None:
        if self._replay_enabled:
            return
        self._replay_enabled = True
        for channel in self._channels.values():
            channel.enable_replay()

    def disable_replay(self) -> None:
        if not self._replay_enabled:
            return
        self._replay_enabled = False
        for channel in self._channels.values():
            channel.disable_replay()

    @property
    def replay_buffer_size(self) -> int:
        return self._replay_buffer_size

    def set_replay_buffer_size(self, size: int) -> None:
        if not self._replay_enabled:
            raise ReplayNotEnabledError()
        if size < 1:
            raise BufferSizeNotValidError(size)
        self._replay_buffer_size = size
        for channel in self._channels.values():
            channel.apply_replay_buffer_size(size)

    def clear_replay_buffers(self) -> None:
        if not self._replay_enabled:
            raise ReplayNotEnabledError()
        for channel in self._channels.values():
            if channel.replay_is_enabled():
                channel.clear_replay_buffer()

    def clear_replay_buffer_for(self, name: str) -> None:
        if not self._replay_enabled:
            raise ReplayNotEnabledError()
        channel = self._channels.get(name)
        if channel is not None:
            channel.clear_replay_buffer()
