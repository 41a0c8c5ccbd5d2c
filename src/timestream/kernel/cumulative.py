"""Cumulative converter - delay-relative steps to absolute time and back."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from itertools import groupby
from operator import attrgetter
from typing import Any

from timestream.kernel.event import Number, Stamped, Step

logger = logging.getLogger(__name__)

Cumulative = tuple[Stamped[Any], ...]


def to_cumulative(steps: Iterable[Step]) -> Cumulative:
    """Drain ``steps`` once and tag each with its absolute offset.

    The first entry's offset is its own delay. Any iterable of steps is
    accepted, a TimeStream included.
    """
    entries: list[Stamped[Any]] = []
    now: Number = 0
    for step in steps:
        now += step.delay
        if step.kind == "interval":
            entries.append(Stamped.interval(now))
        else:
            entries.append(Stamped(step.payload, now))
    logger.debug("accumulated %d steps, ending at %s", len(entries), now)
    return tuple(entries)


def to_relative(seq: Iterable[Stamped[Any]]) -> Iterator[Step]:
    """Yield the delay-relative steps for a cumulative sequence.

    Each delay is the gap to the previous entry; the first entry's delay is
    its offset from stream start. A sequence that goes back in time raises
    InvalidDelay at the offending entry.
    """
    previous: Number = 0
    for entry in seq:
        yield entry.to_step(entry.at - previous)
        previous = entry.at


def join_simultaneous(seq: Iterable[Stamped[Any]]) -> Cumulative:
    """Collapse entries with exactly equal offsets into one entry.

    Several events at one offset become a single joined entry whose payload
    is the tuple of their payloads in sequence order (already joined entries
    are flattened into it). A lone event is kept as it is. Intervals sharing
    an offset with an event carry nothing and are dropped; a group of
    intervals alone becomes one interval.
    """
    joined: list[Stamped[Any]] = []
    for at, group in groupby(seq, key=attrgetter("at")):
        events = [entry for entry in group if entry.kind == "event"]
        if not events:
            joined.append(Stamped.interval(at))
        elif len(events) == 1:
            joined.append(events[0])
        else:
            payloads: list[Any] = []
            for entry in events:
                if entry.joined:
                    payloads.extend(entry.payload)
                else:
                    payloads.append(entry.payload)
            joined.append(Stamped(tuple(payloads), at, joined=True))
    return tuple(joined)


def is_monotonic(seq: Iterable[Stamped[Any]]) -> bool:
    """True if offsets never decrease along ``seq``."""
    previous: Number | None = None
    for entry in seq:
        if previous is not None and entry.at < previous:
            return False
        previous = entry.at
    return True
