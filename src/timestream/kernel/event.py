"""Step types - the tagged variant a stream is made of.

A delay-relative stream yields Event and Interval steps and signals its end
with END. A cumulative sequence holds Stamped entries instead, whose ``at``
is an absolute offset from stream start. The two forms never mix.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Generic, Literal, TypeVar

from timestream.kernel.errors import InvalidDelay

T = TypeVar("T")
R = TypeVar("R")

Number = int | float


def check_delay(value: Any, what: str = "delay") -> Number:
    """Return ``value`` if it is a usable time offset, else raise InvalidDelay."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidDelay(f"{what} must be a number, got {type(value).__name__}", value)
    if math.isnan(value):
        raise InvalidDelay(f"{what} must not be NaN", value)
    if value < 0:
        raise InvalidDelay(f"{what} must not be negative, got {value!r}", value)
    return value


@dataclass(frozen=True)
class Event(Generic[T]):
    """A payload together with the time elapsed since the previous step."""

    payload: T
    delay: Number = 0

    kind: ClassVar[Literal["event"]] = "event"

    def __post_init__(self) -> None:
        check_delay(self.delay)

    def shifted(self, amount: Number) -> Event[T]:
        return replace(self, delay=self.delay + amount)

    def with_payload(self, payload: R) -> Event[R]:
        return Event(payload, self.delay)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Interval:
    """Advance time by ``delay`` without emitting anything."""

    delay: Number = 0

    kind: ClassVar[Literal["interval"]] = "interval"

    def __post_init__(self) -> None:
        check_delay(self.delay)

    def shifted(self, amount: Number) -> Interval:
        return replace(self, delay=self.delay + amount)


@dataclass(frozen=True)
class End:
    """Returned by a producer once it has no more steps."""

    kind: ClassVar[Literal["end"]] = "end"


END = End()

Step = Event[Any] | Interval


@dataclass(frozen=True)
class Stamped(Generic[T]):
    """
    A cumulative-form entry.

    Attributes:
        payload: The step's payload, a tuple of payloads when ``joined``,
            or None for an interval.
        at: Absolute offset from stream start.
        kind: "event" or "interval".
        joined: True when several simultaneous events were collapsed.
    """

    payload: T | None
    at: Number
    kind: Literal["event", "interval"] = "event"
    joined: bool = False

    def __post_init__(self) -> None:
        check_delay(self.at, what="absolute time")

    @staticmethod
    def interval(at: Number) -> Stamped[Any]:
        return Stamped(None, at, kind="interval")

    def to_step(self, delay: Number) -> Step:
        """Rebuild the delay-relative step this entry stands for."""
        if self.kind == "interval":
            return Interval(delay)
        return Event(self.payload, delay)
