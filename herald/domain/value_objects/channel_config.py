from dataclasses import dataclass

from herald.domain.errors import ConfigError


@dataclass(frozen=True)
class ChannelConfig:
    """
    Value Object holding the construction settings of a single channel.
    """
    name: str
    replay: bool = False
    replay_buffer_size: int = 1
    no_listeners_warning: bool = False

    def __post_init__(self):
        if not self.name:
            raise ConfigError("config.name:str is required")
        if self.replay_buffer_size < 1:
            raise ConfigError(
                f"config.replay_buffer_size must be >= 1, got {self.replay_buffer_size}"
            )
