"""Port protocols for timestream - pure abstractions."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from timestream.kernel.event import Number


class WaitPort(Protocol):
    """Suspends the caller for a duration given in stream time units."""

    async def wait(self, duration: Number) -> None:
        """Resume once ``duration`` has elapsed."""
        ...


@runtime_checkable
class SinkPort(Protocol):
    """Receives payloads in stream order."""

    async def send(self, payload: Any) -> None:
        """Deliver one payload."""
        ...
