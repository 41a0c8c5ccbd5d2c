import pytest
from hypothesis import given

from timestream import (
    Event,
    Interval,
    InvalidDelay,
    Stamped,
    TimeStream,
    from_cumulative,
    from_cumulative_joined,
    join_simultaneous,
    to_cumulative,
)
from timestream.kernel.cumulative import is_monotonic
from strategies import cumulative


def test_to_cumulative_is_running_sum() -> None:
    kick = TimeStream.from_array([("kick", 0), ("kick", 500), ("kick", 500)])
    assert kick.to_cumulative() == (
        Stamped("kick", 0),
        Stamped("kick", 500),
        Stamped("kick", 1000),
    )


def test_first_offset_is_first_delay() -> None:
    snare = TimeStream.from_array([("snare", 500), ("snare", 500)])
    assert to_cumulative(snare) == (Stamped("snare", 500), Stamped("snare", 1000))


def test_to_cumulative_keeps_intervals() -> None:
    stream = TimeStream.from_array([("a", 10), Interval(30), ("b", 5)])
    assert stream.to_cumulative() == (
        Stamped("a", 10),
        Stamped.interval(40),
        Stamped("b", 45),
    )


def test_to_cumulative_drains_single_use_stream_once() -> None:
    stream = TimeStream.from_iterator(iter([Event("a", 1), Event("b", 2)]))
    assert to_cumulative(stream) == (Stamped("a", 1), Stamped("b", 3))


def test_from_cumulative_first_delay_is_absolute() -> None:
    stream = from_cumulative((Stamped("x", 100), Stamped("y", 100), Stamped("z", 250)))
    assert list(stream) == [Event("x", 100), Event("y", 0), Event("z", 150)]
    assert stream.restartable


def test_from_cumulative_of_empty_sequence() -> None:
    assert list(from_cumulative(())) == []


@pytest.mark.parametrize(
    "seq",
    [
        (),
        (Stamped("a", 0),),
        (Stamped("a", 0), Stamped("b", 0), Stamped("c", 0)),
        (Stamped("a", 5), Stamped.interval(9), Stamped("b", 9), Stamped("c", 120)),
        (Stamped("a", 0.5), Stamped("b", 1.5), Stamped("c", 2.25)),
    ],
)
def test_round_trip(seq) -> None:
    assert to_cumulative(from_cumulative(seq)) == seq


@given(cumulative(intervals=True))
def test_round_trip_of_generated_sequences(seq) -> None:
    assert to_cumulative(from_cumulative(seq)) == seq


def test_from_cumulative_rejects_decreasing_offsets_on_traversal() -> None:
    stream = from_cumulative((Stamped("a", 10), Stamped("b", 5)))
    with pytest.raises(InvalidDelay):
        list(stream)


def test_join_simultaneous_groups_equal_offsets() -> None:
    seq = (
        Stamped("kick", 0),
        Stamped("kick", 500),
        Stamped("snare", 500),
        Stamped("hat", 750),
    )
    assert join_simultaneous(seq) == (
        Stamped("kick", 0),
        Stamped(("kick", "snare"), 500, joined=True),
        Stamped("hat", 750),
    )


def test_join_simultaneous_uses_exact_equality() -> None:
    seq = (Stamped("a", 0.1 + 0.2), Stamped("b", 0.3))
    assert join_simultaneous(seq) == seq


def test_join_drops_intervals_next_to_events() -> None:
    seq = (Stamped.interval(100), Stamped("a", 100), Stamped.interval(200), Stamped.interval(200))
    assert join_simultaneous(seq) == (Stamped("a", 100), Stamped.interval(200))


def test_join_flattens_already_joined_entries() -> None:
    seq = (Stamped(("a", "b"), 10, joined=True), Stamped("c", 10))
    assert join_simultaneous(seq) == (Stamped(("a", "b", "c"), 10, joined=True),)


def test_join_keeps_tuple_payloads_that_were_not_joined() -> None:
    seq = (Stamped(("chord", 1), 10), Stamped("c", 10))
    assert join_simultaneous(seq) == (Stamped((("chord", 1), "c"), 10, joined=True),)


def test_from_cumulative_joined_emits_one_event_per_offset() -> None:
    seq = (Stamped("a", 0), Stamped("b", 0), Stamped("c", 40))
    assert list(from_cumulative_joined(seq)) == [Event(("a", "b"), 0), Event("c", 40)]


def test_is_monotonic() -> None:
    assert is_monotonic(())
    assert is_monotonic((Stamped("a", 1), Stamped("b", 1), Stamped("c", 2)))
    assert not is_monotonic((Stamped("a", 2), Stamped("b", 1)))
