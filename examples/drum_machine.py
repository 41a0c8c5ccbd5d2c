from __future__ import annotations

import asyncio
import logging

from timestream import PlaybackConfig, PlaybackResult, TimeStream


def build_pattern() -> TimeStream:
    kick = TimeStream.from_array([("kick", 0), ("kick", 500), ("kick", 500), ("kick", 500)])
    snare = TimeStream.from_array([("snare", 500), {"interval": 500}, ("snare", 500)])
    hats = TimeStream.from_array([("hat", 250)] * 6)
    return kick.merge_join(snare).merge(hats)


async def play_bars(bars: int) -> PlaybackResult:
    pattern = build_pattern()
    song = pattern
    for _ in range(bars - 1):
        song = song.concat(pattern.delay(500))
    return await song.consume_with_time(print, config=PlaybackConfig(trace=True))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    res = asyncio.run(play_bars(2))
    print(f"emitted {res.emitted} events over {res.elapsed} ms")
