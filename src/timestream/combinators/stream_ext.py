"""TimeStream extensions for merging streams."""

from __future__ import annotations

from collections.abc import Iterator

from timestream.combinators.ops import merge, merge_join
from timestream.kernel.cumulative import to_relative
from timestream.kernel.event import Step
from timestream.kernel.stream import TimeStream


def merge_streams(self: TimeStream, other: TimeStream) -> TimeStream:
    """Merge two streams so every step keeps its absolute timing.

    Neither operand is read until the result is traversed. Traversal then
    drains both, merges their cumulative forms and replays the result in
    delay-relative form.

    Example:
        >>> kick = TimeStream.from_array([("kick", 0), ("kick", 500)])
        >>> snare = TimeStream.from_array([("snare", 250)])
        >>> [(s.payload, s.delay) for s in kick.merge(snare)]
        [('kick', 0), ('snare', 250), ('kick', 250)]
    """

    def produce() -> Iterator[Step]:
        yield from to_relative(merge(self.to_cumulative(), other.to_cumulative()))

    return self._derive(produce, other)


def merge_join_streams(self: TimeStream, other: TimeStream) -> TimeStream:
    """Merge two streams, joining simultaneous events into one.

    A joined event's payload is the tuple of the tied payloads, this
    stream's first.
    """

    def produce() -> Iterator[Step]:
        yield from to_relative(merge_join(self.to_cumulative(), other.to_cumulative()))

    return self._derive(produce, other)


# Register the merge operations
TimeStream.register_op("merge", merge_streams)
TimeStream.register_op("merge_join", merge_join_streams)
