"""
Registration Handles

Architectural Intent:
- Capability objects returned when a listener or middleware is registered
- Hold a non-owning back-reference to the channel and the registered item
- remove() is idempotent; listener handles can also replay buffered values
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from herald.domain.entities.channel import Channel
    from herald.domain.services.emission import Middleware


class ListenerHandle:
    """Handle for one live listener registration.

    A channel hands out a single handle per registration; once the listener
    is removed and subscribed again, older handles no longer detach it.
    """

    def __init__(self, listener: Callable[..., Any], channel: Channel) -> None:
        self.listener = listener
        self._channel = channel
        self._removed = False

    @property
    def removed(self) -> bool:
        return self._removed

    def remove(self) -> None:
        if self._removed:
            return
        self._removed = True
        self._channel.release(self)

    def replay(self, amount: int) -> ListenerHandle:
        """Deliver the last ``amount`` buffered values to this listener."""
        self._channel.replay(self.listener, amount)
        return self

    def __repr__(self) -> str:
        return f"ListenerHandle(channel={self._channel.name!r}, listener={self.listener!r})"


class MiddlewareHandle:
    def __init__(self, middleware: Middleware, channel: Channel) -> None:
        self.middleware = middleware
        self._channel = channel
        self._removed = False

    @property
    def removed(self) -> bool:
        return self._removed

    def remove(self) -> None:
        if self._removed:
            return
        self._removed = True
        self._channel.remove_middleware(self.middleware)

    def __repr__(self) -> str:
        return f"MiddlewareHandle(channel={self._channel.name!r}, middleware={self.middleware!r})"
