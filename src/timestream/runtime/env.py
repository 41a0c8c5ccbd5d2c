"""Playback configuration and port aggregation."""

from __future__ import annotations

from dataclasses import dataclass

from timestream.kernel.ports import WaitPort
from timestream.kernel.trace import Trace
from timestream.runtime.wait import AsyncioWait


@dataclass(frozen=True)
class PlaybackConfig:
    """
    Settings for playing a stream.

    Attributes:
        time_unit: Seconds per stream time unit for the default wait port.
        trace: Create a Trace when the environment does not provide one.
    """

    time_unit: float = 0.001
    trace: bool = False

    def __post_init__(self) -> None:
        if self.time_unit <= 0:
            raise ValueError("time_unit must be positive")


@dataclass
class PlaybackEnv:
    """Environment aggregation - combines the ports a player needs."""

    wait: WaitPort
    trace: Trace | None = None

    @classmethod
    def from_config(cls, config: PlaybackConfig) -> PlaybackEnv:
        return cls(
            wait=AsyncioWait(config.time_unit),
            trace=Trace() if config.trace else None,
        )
