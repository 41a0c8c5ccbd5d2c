"""Runtime module - playing streams against real time."""

from timestream.runtime.env import PlaybackConfig, PlaybackEnv

# Import player to register TimeStream.consume_with_time
from timestream.runtime.player import Player, PlaybackResult, consume_with_time
from timestream.runtime.wait import AsyncioWait

__all__ = [
    "AsyncioWait",
    "PlaybackConfig",
    "PlaybackEnv",
    "PlaybackResult",
    "Player",
    "consume_with_time",
]
