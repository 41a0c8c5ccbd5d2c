"""Structured source literals for building streams.

This module validates the literal formats accepted by TimeStream.from_array
and TimeStream.from_json.
"""

from .literal import (
    EventLiteral,
    IntervalLiteral,
    parse_item,
    parse_source,
    parse_source_json,
)

__all__ = [
    "EventLiteral",
    "IntervalLiteral",
    "parse_item",
    "parse_source",
    "parse_source_json",
]
