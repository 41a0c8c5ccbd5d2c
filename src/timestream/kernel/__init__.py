"""Kernel layer - steps, streams and the cumulative converter."""

from timestream.kernel.errors import (
    EmptyStreamDelay,
    ExhaustedStreamReuse,
    InvalidDelay,
    SourceFormatError,
    TimeStreamError,
)
from timestream.kernel.event import END, End, Event, Interval, Number, Stamped, Step
from timestream.kernel.cumulative import Cumulative, is_monotonic, join_simultaneous, to_cumulative
from timestream.kernel.ports import SinkPort, WaitPort
from timestream.kernel.trace import Evidence, Trace
from timestream.kernel.stream import (
    Cursor,
    Factory,
    Producer,
    TimeStream,
    from_cumulative,
    from_cumulative_joined,
)

__all__ = [
    "Event",
    "Interval",
    "End",
    "END",
    "Stamped",
    "Step",
    "Number",
    "TimeStream",
    "Producer",
    "Factory",
    "Cursor",
    # Cumulative form
    "Cumulative",
    "to_cumulative",
    "from_cumulative",
    "from_cumulative_joined",
    "join_simultaneous",
    "is_monotonic",
    # Errors
    "TimeStreamError",
    "InvalidDelay",
    "ExhaustedStreamReuse",
    "EmptyStreamDelay",
    "SourceFormatError",
    # Ports & tracing
    "WaitPort",
    "SinkPort",
    "Trace",
    "Evidence",
]
