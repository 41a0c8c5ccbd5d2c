"""TimeStream - a lazily produced sequence of timed steps."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from timestream.kernel.cumulative import Cumulative, join_simultaneous, to_cumulative, to_relative
from timestream.kernel.errors import EmptyStreamDelay, ExhaustedStreamReuse, SourceFormatError
from timestream.kernel.event import END, End, Event, Interval, Number, Stamped, Step, check_delay
from timestream.structured.literal import parse_source, parse_source_json

T = TypeVar("T")
R = TypeVar("R")


class Producer(Generic[T]):
    """Pull-based reader over one traversal of a stream.

    ``next()`` returns the next Event or Interval, then END forever.
    """

    def __init__(self, steps: Iterable[Any]) -> None:
        self._steps = iter(steps)
        self._done = False

    def next(self) -> Step | End:
        if self._done:
            return END
        step = next(self._steps, END)
        if isinstance(step, End):
            self._done = True
        elif not isinstance(step, (Event, Interval)):
            raise SourceFormatError(f"stream produced a non-step value {step!r}", step)
        return step

    def __iter__(self) -> Iterator[Step]:
        while True:
            step = self.next()
            if step.kind == "end":
                return
            yield step


@dataclass
class Factory:
    """Source whose open() calls ``fn`` for a fresh iterable.

    A factory that is not restartable may be opened once.
    """

    fn: Callable[[], Iterable[Step]]
    restartable: bool = True
    opened: bool = field(default=False, compare=False)

    def open(self) -> Producer[Any]:
        if not self.restartable:
            if self.opened:
                raise ExhaustedStreamReuse("single-use stream was already traversed")
            self.opened = True
        return Producer(self.fn())


@dataclass
class Cursor:
    """Single-use source over one iterator."""

    iterator: Iterator[Step]
    opened: bool = False

    restartable: ClassVar[bool] = False

    def open(self) -> Producer[Any]:
        if self.opened:
            raise ExhaustedStreamReuse("single-use stream was already traversed")
        self.opened = True
        return Producer(self.iterator)


# Extension registry - operations other modules attach to TimeStream
_extensions_registry: dict[str, Callable] = {}


@dataclass(frozen=True)
class TimeStream(Generic[T]):
    """A sequence of Events and Intervals in delay-relative form.

    Operators never open their operands until the resulting stream is
    traversed. A stream is restartable when it is backed by a Factory whose
    operands are all restartable; a Cursor-backed stream can be traversed
    once, and opening it again raises ExhaustedStreamReuse.

    Capabilities can be registered via register_op() for extensibility.
    """

    _source: Factory | Cursor

    @classmethod
    def register_op(cls, name: str, fn: Callable[..., Any]) -> None:
        """Register an operation on the TimeStream class.

        Args:
            name: The operation name (e.g., "merge")
            fn: The function to register; it receives the stream first
        """
        _extensions_registry[name] = fn

    def __getattr__(self, name: str) -> Any:
        """Allow calling registered extension methods."""
        if name in _extensions_registry:
            fn = _extensions_registry[name]
            return lambda *args, **kwargs: fn(self, *args, **kwargs)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    # Construction

    @classmethod
    def from_factory(cls, fn: Callable[[], Iterable[Step]], restartable: bool = True) -> TimeStream[Any]:
        return cls(Factory(fn, restartable))

    @classmethod
    def from_iterator(cls, steps: Iterable[Step]) -> TimeStream[Any]:
        """Single-use stream over ``steps``."""
        return cls(Cursor(iter(steps)))

    @classmethod
    def from_events(cls, steps: Iterable[Step]) -> TimeStream[Any]:
        """Restartable stream over already built steps."""
        frozen = tuple(steps)
        return cls.from_factory(lambda: frozen)

    @classmethod
    def from_array(cls, items: Iterable[object]) -> TimeStream[Any]:
        """Build a restartable stream from a source literal.

        Items are ``(payload, delay)`` pairs, Events, Intervals, or mappings
        (see timestream.structured). Invalid delays raise InvalidDelay here,
        before anything is traversed.
        """
        return cls.from_events(parse_source(items))

    @classmethod
    def from_json(cls, text: str | bytes) -> TimeStream[Any]:
        return cls.from_events(parse_source_json(text))

    @classmethod
    def from_cumulative(cls, seq: Iterable[Stamped[Any]]) -> TimeStream[Any]:
        """Delay-relative stream for a cumulative sequence.

        The first step's delay is its absolute offset, so the stream starts at
        the same origin as the sequence.
        """
        frozen = tuple(seq)
        return cls.from_factory(lambda: to_relative(frozen))

    @classmethod
    def from_cumulative_joined(cls, seq: Iterable[Stamped[Any]]) -> TimeStream[Any]:
        """Like from_cumulative, with simultaneous entries joined first."""
        return cls.from_cumulative(join_simultaneous(seq))

    @classmethod
    def empty(cls) -> TimeStream[Any]:
        return cls.from_events(())

    # Traversal

    @property
    def restartable(self) -> bool:
        return self._source.restartable

    def open(self) -> Producer[T]:
        """Start a traversal."""
        return self._source.open()

    def __iter__(self) -> Iterator[Step]:
        return iter(self.open())

    def _derive(self, fn: Callable[[], Iterable[Step]], *others: TimeStream[Any]) -> TimeStream[Any]:
        restartable = self.restartable and all(other.restartable for other in others)
        return TimeStream.from_factory(fn, restartable)

    # Transformation

    def map(self, fn: Callable[[T], R]) -> TimeStream[R]:
        """Apply ``fn`` to every payload, keeping delays and intervals."""

        def produce() -> Iterator[Step]:
            for step in self.open():
                if step.kind == "event":
                    yield step.with_payload(fn(step.payload))
                else:
                    yield step

        return self._derive(produce)

    def map_events(self, fn: Callable[[Event[T]], Event[R]]) -> TimeStream[R]:
        """Replace every Event with ``fn(event)``; ``fn`` may change delays."""

        def produce() -> Iterator[Step]:
            for step in self.open():
                yield fn(step) if step.kind == "event" else step

        return self._derive(produce)

    def delay(self, amount: Number, strict: bool = False) -> TimeStream[T]:
        """Shift the whole stream later by ``amount``.

        Only the first step's delay changes. On an empty stream this is a
        no-op, unless ``strict`` is set, in which case traversal raises
        EmptyStreamDelay.
        """
        check_delay(amount, what="delay amount")

        def produce() -> Iterator[Step]:
            producer = self.open()
            first = producer.next()
            if first.kind == "end":
                if strict:
                    raise EmptyStreamDelay(f"cannot delay an empty stream by {amount!r}")
                return
            yield first.shifted(amount)
            yield from producer

        return self._derive(produce)

    def concat(self, other: TimeStream[Any]) -> TimeStream[Any]:
        """Every step of this stream, then every step of ``other``."""

        def produce() -> Iterator[Step]:
            yield from self.open()
            yield from other.open()

        return self._derive(produce, other)

    # Consumption

    def to_cumulative(self) -> Cumulative:
        """Drain the stream once into absolute-time entries."""
        return to_cumulative(self.open())

    def for_each(self, sink: Callable[[T], Any]) -> None:
        """Call ``sink`` with every payload, in order. Intervals are skipped."""
        for step in self.open():
            if step.kind == "event":
                sink(step.payload)

    def consume(self, sink: Callable[[Step], Any]) -> None:
        """Call ``sink`` with every step, intervals included."""
        for step in self.open():
            sink(step)

    def duration(self) -> Number:
        """Total of all delays. Drains the stream."""
        total: Number = 0
        for step in self.open():
            total += step.delay
        return total


def from_cumulative(seq: Iterable[Stamped[Any]]) -> TimeStream[Any]:
    return TimeStream.from_cumulative(seq)


def from_cumulative_joined(seq: Iterable[Stamped[Any]]) -> TimeStream[Any]:
    return TimeStream.from_cumulative_joined(seq)
