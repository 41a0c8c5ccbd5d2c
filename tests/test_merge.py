"""Merge engine tests: properties over generated inputs and fixed scenarios."""

from collections import Counter

import pytest
from hypothesis import given

from timestream import Event, ExhaustedStreamReuse, Stamped, TimeStream, merge, merge_all, merge_join
from timestream.kernel.cumulative import is_monotonic
from strategies import cumulative


@given(cumulative("a"), cumulative("b"))
def test_length_is_preserved(a, b) -> None:
    assert len(merge(a, b)) == len(a) + len(b)


@given(cumulative("a"), cumulative("b"))
def test_entries_are_preserved(a, b) -> None:
    assert Counter(merge(a, b)) == Counter(a) + Counter(b)


@given(cumulative("a"), cumulative("b"))
def test_each_input_keeps_its_order(a, b) -> None:
    merged = merge(a, b)
    assert tuple(e for e in merged if e.payload[0] == "a") == a
    assert tuple(e for e in merged if e.payload[0] == "b") == b


@given(cumulative("a"), cumulative("b"))
def test_output_is_non_decreasing(a, b) -> None:
    assert is_monotonic(merge(a, b))


@given(cumulative("a"), cumulative("b"))
def test_ties_put_first_input_first(a, b) -> None:
    merged = merge(a, b)
    for left, right in zip(merged, merged[1:]):
        if left.at == right.at and left.payload[0] != right.payload[0]:
            assert left.payload[0] == "a"


def test_inputs_are_not_modified() -> None:
    a = [Stamped("a", 0), Stamped("a", 10)]
    b = [Stamped("b", 5)]
    merge(a, b)
    assert a == [Stamped("a", 0), Stamped("a", 10)]
    assert b == [Stamped("b", 5)]


def test_kick_and_snare_merge() -> None:
    kick = TimeStream.from_array([("kick", 0), ("kick", 500), ("kick", 500)])
    snare = TimeStream.from_array([("snare", 500), ("snare", 500)])

    merged = merge(kick.to_cumulative(), snare.to_cumulative())

    assert merged == (
        Stamped("kick", 0),
        Stamped("kick", 500),
        Stamped("snare", 500),
        Stamped("kick", 1000),
        Stamped("snare", 1000),
    )
    assert list(TimeStream.from_cumulative(merged)) == [
        Event("kick", 0),
        Event("kick", 500),
        Event("snare", 0),
        Event("kick", 500),
        Event("snare", 0),
    ]


def test_empty_side_returns_other_unchanged() -> None:
    x = TimeStream.from_array([("x", 100)]).to_cumulative()
    assert merge((), x) == x
    assert merge(x, ()) == x
    assert merge((), ()) == ()


def test_all_tied_entries_drain_first_input_first() -> None:
    a = (Stamped("a1", 0), Stamped("a2", 0))
    b = (Stamped("b1", 0), Stamped("b2", 0))
    assert [e.payload for e in merge(a, b)] == ["a1", "a2", "b1", "b2"]


def test_tied_runs_alternate_per_offset() -> None:
    a = (Stamped("a1", 0), Stamped("a2", 10))
    b = (Stamped("b1", 0), Stamped("b2", 10))
    assert [e.payload for e in merge(a, b)] == ["a1", "b1", "a2", "b2"]


def test_kick_and_snare_merge_join() -> None:
    kick = TimeStream.from_array([("kick", 0), ("kick", 500), ("kick", 500)])
    snare = TimeStream.from_array([("snare", 500), ("snare", 500)])

    joined = merge_join(kick.to_cumulative(), snare.to_cumulative())

    assert joined == (
        Stamped("kick", 0),
        Stamped(("kick", "snare"), 500, joined=True),
        Stamped(("kick", "snare"), 1000, joined=True),
    )


@given(cumulative("a"), cumulative("b"))
def test_merge_join_never_repeats_an_offset(a, b) -> None:
    offsets = [e.at for e in merge_join(a, b)]
    assert len(offsets) == len(set(offsets))


def test_merge_all_prefers_earlier_arguments() -> None:
    a = (Stamped("a", 5),)
    b = (Stamped("b", 0), Stamped("b", 5))
    c = (Stamped("c", 5),)
    assert [e.payload for e in merge_all(a, b, c)] == ["b", "a", "b", "c"]
    assert merge_all() == ()


@given(cumulative("a"), cumulative("b"), cumulative("c"))
def test_merge_is_associative(a, b, c) -> None:
    assert merge(merge(a, b), c) == merge(a, merge(b, c))


def test_stream_merge_keeps_relative_timing() -> None:
    kick = TimeStream.from_array([("kick", 0), ("kick", 500)])
    snare = TimeStream.from_array([("snare", 250)])

    merged = kick.merge(snare)

    assert list(merged) == [Event("kick", 0), Event("snare", 250), Event("kick", 250)]
    assert merged.duration() == kick.duration()


def test_stream_merge_join_combines_simultaneous_events() -> None:
    a = TimeStream.from_array([("a", 0), ("a", 100)])
    b = TimeStream.from_array([("b", 100)])
    assert list(a.merge_join(b)) == [Event("a", 0), Event(("a", "b"), 100)]


def test_stream_merge_reads_operands_only_on_traversal() -> None:
    opened = []

    def source(name):
        def factory():
            opened.append(name)
            yield Event(name, 1)
        return TimeStream.from_factory(factory)

    merged = source("a").merge(source("b"))
    assert opened == []
    assert list(merged) == [Event("a", 1), Event("b", 0)]
    assert opened == ["a", "b"]


def test_stream_merge_of_single_use_operand_is_single_use() -> None:
    a = TimeStream.from_iterator(iter([Event("a", 1)]))
    merged = a.merge(TimeStream.from_array([("b", 2)]))

    assert not merged.restartable
    assert list(merged) == [Event("a", 1), Event("b", 1)]
    with pytest.raises(ExhaustedStreamReuse):
        list(merged)
