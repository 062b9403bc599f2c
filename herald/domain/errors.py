"""
Domain Errors

Architectural Intent:
- Single exception hierarchy for every failure the dispatcher reports
- Errors are raised synchronously at the call site that broke the contract
- Nothing here is retried internally; callers fix the misuse
"""

from typing import Optional


class HeraldError(Exception):
    """Base class for all herald errors."""


class ConfigError(HeraldError):
    """Raised when a channel or registry is constructed with invalid settings."""


class ReplayNotEnabledError(HeraldError):
    """Raised when a replay-dependent operation runs while replay is off."""

    def __init__(self, channel_name: Optional[str] = None) -> None:
        self.channel_name = channel_name
        if channel_name:
            message = f"Replay is not enabled for channel '{channel_name}'"
        else:
            message = "Replay is not enabled"
        super().__init__(message)


class BufferSizeNotValidError(HeraldError):
    """Raised when a replay buffer size or replay amount is below 1."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Replay buffer size needs to be >= 1, got {size}")
