"""Source literal validation for TimeStream.from_array.

A source literal is an ordered sequence whose items are one of:

- a ``(payload, delay)`` pair (tuple or list of length two),
- a pre-built Event or Interval,
- a mapping ``{"payload": ..., "delay": ...}`` or ``{"interval": ...}``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, PlainValidator, TypeAdapter, ValidationError

from timestream.kernel.errors import InvalidDelay, SourceFormatError
from timestream.kernel.event import Event, Interval, Number, Step, check_delay

# Delays follow the same rule as Event itself, with no numeric coercion.
Delay = Annotated[Number, PlainValidator(lambda value: check_delay(value))]

_TIME_FIELDS = ("delay", "interval")


class EventLiteral(BaseModel):
    """A payload with its delay since the previous step."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    payload: Any
    delay: Delay = 0


class IntervalLiteral(BaseModel):
    """Time that passes without a payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    interval: Delay


_json_document = TypeAdapter(list[Any])


def _validate(model: type[BaseModel], raw: object, data: Mapping[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        # A bad time field is an InvalidDelay; anything else is a shape problem.
        for error in exc.errors():
            if error["loc"] and error["loc"][0] in _TIME_FIELDS:
                raise InvalidDelay(f"invalid delay in source item {raw!r}: {error['msg']}", raw) from exc
        raise SourceFormatError(f"malformed source item {raw!r}", raw) from exc


def parse_item(item: object) -> Step:
    """Turn one source literal item into a step."""
    kind = getattr(item, "kind", None)
    if isinstance(item, (Event, Interval)) and kind in ("event", "interval"):
        return item

    if isinstance(item, Mapping):
        if "interval" in item:
            parsed = _validate(IntervalLiteral, item, item)
            return Interval(parsed.interval)
        parsed = _validate(EventLiteral, item, item)
        return Event(parsed.payload, parsed.delay)

    if isinstance(item, (tuple, list)):
        if len(item) != 2:
            raise SourceFormatError(f"expected a (payload, delay) pair, got {len(item)} items", item)
        parsed = _validate(EventLiteral, item, {"payload": item[0], "delay": item[1]})
        return Event(parsed.payload, parsed.delay)

    raise SourceFormatError(f"cannot build a step from {type(item).__name__}", item)


def parse_source(items: Iterable[object]) -> tuple[Step, ...]:
    """Validate every item of a source literal, in order."""
    return tuple(parse_item(item) for item in items)


def parse_source_json(text: str | bytes) -> tuple[Step, ...]:
    """Validate a JSON array of source literal items."""
    try:
        items = _json_document.validate_json(text)
    except ValidationError as exc:
        raise SourceFormatError("source document must be a JSON array", text) from exc
    return parse_source(items)
