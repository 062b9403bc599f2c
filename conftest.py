"""Global test configuration.

Shared fixtures for recording listener calls and building channels.
"""

import pytest

from herald.domain.entities.channel import Channel
from herald.domain.value_objects.channel_config import ChannelConfig


class Recorder:
    """Listener that records every argument tuple it is called with."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __call__(self, *args) -> None:
        self.calls.append(args)

    @property
    def values(self) -> list:
        return [call[0] for call in self.calls]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_recorder():
    return Recorder


@pytest.fixture
def make_channel():
    def _make(name: str = "orders", **kwargs) -> Channel:
        return Channel(ChannelConfig(name=name, **kwargs))

    return _make
