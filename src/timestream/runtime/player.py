"""Player - plays a stream against real time through a wait port."""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from timestream.kernel.event import Number
from timestream.kernel.ports import SinkPort
from timestream.kernel.stream import TimeStream
from timestream.kernel.trace import Trace
from timestream.runtime.env import PlaybackConfig, PlaybackEnv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackResult:
    """
    Outcome of one playback.

    Attributes:
        emitted: Number of payloads handed to the sink.
        elapsed: Stream time waited, in stream units.
        stopped: True if stop() ended playback before the stream did.
    """

    emitted: int
    elapsed: Number
    stopped: bool = False


class Player:
    """Walks a stream once, waiting each step's delay before emitting it.

    Steps are handled strictly one at a time: wait, hand the payload to the
    sink (awaiting it if it returns an awaitable), then move on. Intervals
    are waited for but never reach the sink.

    stop() takes effect before the next wait begins. A wait already in
    progress is not interrupted, and its step is still delivered once. A
    stopped player stays stopped.
    """

    def __init__(self, env: PlaybackEnv | None = None, config: PlaybackConfig | None = None) -> None:
        self.config = config or PlaybackConfig()
        if env is None:
            env = PlaybackEnv.from_config(self.config)
        elif self.config.trace and env.trace is None:
            env = replace(env, trace=Trace())
        self.env = env
        self._stop_requested = False

    def stop(self) -> None:
        self._stop_requested = True

    @property
    def stopping(self) -> bool:
        return self._stop_requested

    async def play(self, stream: TimeStream[Any], sink: SinkPort | Callable[[Any], Any]) -> PlaybackResult:
        """Play ``stream`` into ``sink``, a SinkPort or a plain callable."""
        emit = sink.send if isinstance(sink, SinkPort) else sink
        trace = self.env.trace
        if trace is not None:
            trace.begin("play_begin", info={"restartable": stream.restartable})

        emitted = 0
        elapsed: Number = 0
        stopped = False
        start_time = time.perf_counter()
        logger.info("playback started")

        try:
            producer = stream.open()
            while True:
                if self._stop_requested:
                    stopped = True
                    break
                step = producer.next()
                if step.kind == "end":
                    break

                await self.env.wait.wait(step.delay)
                elapsed += step.delay
                if step.kind == "interval":
                    continue

                outcome = emit(step.payload)
                if inspect.isawaitable(outcome):
                    await outcome
                emitted += 1
                if trace is not None:
                    trace.record("emit", info={"at": elapsed, "delay": step.delay})
        except Exception as exc:
            if trace is not None:
                trace.end("play_error", info={"error": str(exc)})
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if trace is not None:
            trace.end(
                "play_stopped" if stopped else "play_end",
                info={"emitted": emitted, "elapsed": elapsed},
                duration_ms=duration_ms,
            )
        logger.info("playback %s after %d payloads", "stopped" if stopped else "finished", emitted)
        return PlaybackResult(emitted=emitted, elapsed=elapsed, stopped=stopped)


async def consume_with_time(
    self: TimeStream[Any],
    sink: SinkPort | Callable[[Any], Any],
    env: PlaybackEnv | None = None,
    config: PlaybackConfig | None = None,
) -> PlaybackResult:
    """Play the stream: wait each delay, then pass the payload to ``sink``.

    Example:
        >>> await stream.consume_with_time(print)
    """
    return await Player(env, config).play(self, sink)


# Register the playback operation
TimeStream.register_op("consume_with_time", consume_with_time)
