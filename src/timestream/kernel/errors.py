"""Error types for time streams."""

from __future__ import annotations


class TimeStreamError(Exception):
    """Base class for every error raised by timestream."""


class InvalidDelay(TimeStreamError, ValueError):
    """A delay is negative or not a number.

    Raised when an Event or Interval is built, or when a source literal is
    validated.
    """

    def __init__(self, message: str, raw_value: object = None) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"InvalidDelay({super().__repr__()}, raw_value={self.raw_value!r})"


class ExhaustedStreamReuse(TimeStreamError):
    """A single-use stream was opened for a second traversal."""


class EmptyStreamDelay(TimeStreamError):
    """A strict delay() was applied to a stream with no steps."""


class SourceFormatError(TimeStreamError, TypeError):
    """A from_array item has a shape that cannot be turned into a step.

    The raw item is preserved for debugging.
    """

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"SourceFormatError({super().__repr__()}, raw_value={self.raw_value!r})"
