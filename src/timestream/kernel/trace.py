"""Playback trace - an append-only log of what a player did.

The trace is infrastructure. A player writes to it but never reads from it,
and it has no effect on the steps a stream produces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """One playback record.

    Attributes:
        action: "play_begin", "emit", "play_end", "play_stopped" or "play_error".
        id: Position of the record in its trace.
        parent_id: Id of the span the record belongs to, if any.
        timestamp: Wall-clock time of recording.
        info: Record details, e.g. the stream offset of an emitted payload.
        duration_ms: Span length, set on records that close a span.
    """

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None


class Trace:
    """Collects Evidence for one or more playbacks.

    begin() opens a span, and records taken while it is open belong to it.
    end() closes the innermost span with a final record. A disabled trace
    keeps nothing and hands out no ids.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._records: list[Evidence] = []
        self._spans: list[int] = []

    def begin(self, action: str, info: dict[str, Any] | None = None) -> int | None:
        span_id = self.record(action, info)
        if span_id is not None:
            self._spans.append(span_id)
        return span_id

    def end(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        span_id = self._spans.pop() if self._spans else None
        return self.record(action, info, parent_id=span_id, duration_ms=duration_ms)

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Append a record; it joins the innermost open span unless ``parent_id`` is given."""
        if not self.enabled:
            return None
        if parent_id is None and self._spans:
            parent_id = self._spans[-1]
        evidence = Evidence(
            action=action,
            id=len(self._records),
            parent_id=parent_id,
            info=dict(info or {}),
            duration_ms=duration_ms,
        )
        self._records.append(evidence)
        return evidence.id

    @property
    def records(self) -> tuple[Evidence, ...]:
        return tuple(self._records)

    def find(self, action: str) -> list[Evidence]:
        return [ev for ev in self._records if ev.action == action]

    def __len__(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()
        self._spans.clear()
