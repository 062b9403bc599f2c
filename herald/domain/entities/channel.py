"""
Channel Entity

Architectural Intent:
- Owns one named channel's subscribers, middleware chain and replay buffer
- Drives an Emission per publish when middleware is registered
- Keeps in-flight emissions consistent with registration changes through
  snapshots: middleware is snapshotted at publish, subscribers at resolution

Domain Rules:
- Replay disabled means no buffer at all; clearing keeps an empty buffer
- The replay buffer never holds more than its capacity
- Removing the last subscriber notifies the owner through ``on_drained``
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from herald.domain.entities.handles import ListenerHandle, MiddlewareHandle
from herald.domain.errors import BufferSizeNotValidError, ReplayNotEnabledError
from herald.domain.ports.logger_port import LoggerPort
from herald.domain.services.emission import Args, Emission, Middleware
from herald.domain.value_objects.channel_config import ChannelConfig
from herald.domain.value_objects.replay_buffer import ReplayBuffer

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class Channel:
    def __init__(
        self,
        config: ChannelConfig,
        sink: Optional[LoggerPort] = None,
        on_drained: Optional[Callable[[Channel], None]] = None,
    ) -> None:
        self.name = config.name
        self._replay_buffer_size = config.replay_buffer_size
        self._replay_buffer: Optional[ReplayBuffer] = None
        # insertion-ordered; each listener maps to its one live handle
        self._listeners: dict[Listener, ListenerHandle] = {}
        self._middlewares: list[Middleware] = []
        self._no_listeners_warning = config.no_listeners_warning
        self._logger: LoggerPort = sink or logger
        self._on_drained = on_drained

        if config.replay:
            self.enable_replay()

    # Publishing

    def publish(self, *args: Any) -> None:
        """Publish ``args`` through the middleware chain to every subscriber.

        Returns before delivery when a middleware defers its proceed call.
        """
        if not self._listeners:
            if self._no_listeners_warning:
                self._logger.warning(
                    "Channel '%s' was published to but has no listeners",
                    self.name,
                    extra={"channel": self.name},
                )
            if not self._middlewares:
                return

        if self._middlewares:
            emission = Emission(self.name, args, self._middlewares, sink=self._logger)
            emission.then(self._deliver)
            emission.digest()
        else:
            self._deliver(tuple(args))

    def _deliver(self, args: Args) -> None:
        if self._replay_buffer is not None:
            self._replay_buffer.record(args)
        for listener in tuple(self._listeners):
            listener(*args)

    # Listeners

    def subscribe(self, listener: Listener) -> ListenerHandle:
        """Add ``listener``; subscribing it again returns the existing handle."""
        handle = self._listeners.get(listener)
        if handle is None:
            handle = ListenerHandle(listener, self)
            self._listeners[listener] = handle
        return handle

    def release(self, handle: ListenerHandle) -> None:
        """Unsubscribe through ``handle`` only if it is still the live registration."""
        if self._listeners.get(handle.listener) is handle:
            self.unsubscribe(handle.listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            return
        del self._listeners[listener]
        if not self._listeners and self._on_drained is not None:
            self._on_drained(self)

    def has_listener(self, listener: Listener) -> bool:
        return listener in self._listeners

    def count_listeners(self) -> int:
        return len(self._listeners)

    def clear_listeners(self) -> None:
        self._listeners = {}

    # Middleware

    def add_middleware(self, middleware: Middleware) -> MiddlewareHandle:
        """Append ``middleware`` to the chain; re-adding keeps its position."""
        if middleware not in self._middlewares:
            self._middlewares.append(middleware)
        return MiddlewareHandle(middleware, self)

    def remove_middleware(self, middleware: Middleware) -> None:
        if middleware in self._middlewares:
            self._middlewares.remove(middleware)

    def count_middlewares(self) -> int:
        return len(self._middlewares)

    def clear_middlewares(self) -> None:
        self._middlewares = []

    # Replay

    def replay_is_enabled(self) -> bool:
        return self._replay_buffer is not None

    def enable_replay(self) -> None:
        if self._replay_buffer is not None:
            return
        self._replay_buffer = ReplayBuffer(self._replay_buffer_size)

    def disable_replay(self) -> None:
        self._replay_buffer = None

    def clear_replay_buffer(self) -> None:
        if self._replay_buffer is None:
            raise ReplayNotEnabledError(self.name)
        self._replay_buffer.clear()

    @property
    def replay_buffer_size(self) -> int:
        return self._replay_buffer_size

    def set_replay_buffer_size(self, size: int) -> None:
        """Set the replay capacity.

        Shrinking keeps the earliest ``size`` entries currently buffered,
        not the most recent ones.
        """
        if self._replay_buffer is None:
            raise ReplayNotEnabledError(self.name)
        if size < 1:
            raise BufferSizeNotValidError(size)
        self._replay_buffer.resize(size)
        self._replay_buffer_size = size

    def apply_replay_buffer_size(self, size: int) -> None:
        """Set the capacity whether or not replay is on.

        With replay off the size is kept for the next enable_replay().
        """
        if self._replay_buffer is not None:
            self.set_replay_buffer_size(size)
            return
        if size < 1:
            raise BufferSizeNotValidError(size)
        self._replay_buffer_size = size

    def get_replay_buffer(self) -> Optional[list[Args]]:
        if self._replay_buffer is None:
            return None
        return self._replay_buffer.snapshot()

    def replay(self, listener: Listener, amount: int) -> None:
        """Deliver the last ``amount`` buffered tuples to ``listener``, oldest first."""
        if self._replay_buffer is None:
            raise ReplayNotEnabledError(self.name)
        for args in self._replay_buffer.last(amount):
            listener(*args)

    # Diagnostics

    def set_logger(self, sink: LoggerPort) -> None:
        self._logger = sink

    def enable_no_listeners_warning(self) -> None:
        self._no_listeners_warning = True

    def disable_no_listeners_warning(self) -> None:
        self._no_listeners_warning = False

    def no_listeners_warning_is_enabled(self) -> bool:
        return self._no_listeners_warning

    def __repr__(self) -> str:
        return (
            f"Channel(name={self.name!r}, listeners={len(self._listeners)}, "
            f"middlewares={len(self._middlewares)}, replay={self.replay_is_enabled()})"
        )
