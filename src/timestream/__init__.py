from .kernel import (
    END,
    Cumulative,
    EmptyStreamDelay,
    Event,
    Evidence,
    ExhaustedStreamReuse,
    Interval,
    InvalidDelay,
    SourceFormatError,
    Stamped,
    TimeStream,
    TimeStreamError,
    Trace,
    from_cumulative,
    from_cumulative_joined,
    join_simultaneous,
    to_cumulative,
)
from .combinators import merge, merge_all, merge_join
from .runtime import AsyncioWait, PlaybackConfig, PlaybackEnv, PlaybackResult, Player

__all__ = [
    # Steps
    "Event",
    "Interval",
    "END",
    "Stamped",
    # Streams
    "TimeStream",
    # Cumulative form
    "Cumulative",
    "to_cumulative",
    "from_cumulative",
    "from_cumulative_joined",
    "join_simultaneous",
    # Merging
    "merge",
    "merge_join",
    "merge_all",
    # Playback
    "Player",
    "PlaybackConfig",
    "PlaybackEnv",
    "PlaybackResult",
    "AsyncioWait",
    # Tracing
    "Trace",
    "Evidence",
    # Errors
    "TimeStreamError",
    "InvalidDelay",
    "ExhaustedStreamReuse",
    "EmptyStreamDelay",
    "SourceFormatError",
]
