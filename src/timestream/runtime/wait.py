"""Default wait port backed by asyncio."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from timestream.kernel.event import Number


@dataclass(frozen=True)
class AsyncioWait:
    """Sleep on the running event loop.

    Attributes:
        time_unit: Seconds per stream time unit (0.001 reads delays as ms).
    """

    time_unit: float = 0.001

    async def wait(self, duration: Number) -> None:
        await asyncio.sleep(duration * self.time_unit)
