"""Second-granularity countdown with a pluggable progress display."""

import asyncio
import contextlib
import sys
from collections.abc import Awaitable, Callable, Iterator
from contextlib import AbstractContextManager
from typing import TextIO

from confirmator.core.interval import format_interval

TickCallback = Callable[[float, str], None]
DisplayFactory = Callable[[], AbstractContextManager[TickCallback]]
SleepFunc = Callable[[float], Awaitable[object]]

TICK_SECONDS = 1


class ConsoleProgressBar:
    """Single-line text progress bar redrawn in place.

    Renders ``[#####-----]  40% 00:36`` using carriage returns. The line is
    erased when the context exits, including on cancellation.
    """

    def __init__(self, stream: TextIO | None = None, width: int = 20) -> None:
        self._stream = stream or sys.stdout
        self._width = width
        self._last_len = 0

    def __enter__(self) -> TickCallback:
        return self.report

    def __exit__(self, *exc_info: object) -> None:
        self._clear()

    def report(self, fraction: float, remaining: str) -> None:
        """Redraw the bar for the elapsed fraction and remaining time."""
        fraction = min(max(fraction, 0.0), 1.0)
        filled = int(round(fraction * self._width))
        bar = "#" * filled + "-" * (self._width - filled)
        text = f"[{bar}] {fraction * 100:3.0f}% {remaining}"
        padding = " " * max(self._last_len - len(text), 0)
        self._stream.write(f"\r{text}{padding}")
        self._stream.flush()
        self._last_len = len(text)

    def _clear(self) -> None:
        if self._last_len:
            self._stream.write("\r" + " " * self._last_len + "\r")
            self._stream.flush()
            self._last_len = 0


@contextlib.contextmanager
def null_display() -> Iterator[TickCallback]:
    """Display that renders nothing."""
    yield lambda fraction, remaining: None


def console_display(stream: TextIO | None = None, enabled: bool = True) -> DisplayFactory:
    """Pick the console bar when the stream is an interactive terminal."""
    target = stream or sys.stdout
    if enabled and target.isatty():
        return lambda: ConsoleProgressBar(target)
    return null_display


class WaitTicker:
    """Blocks the calling task for a number of seconds, ticking once a second.

    The display is acquired for the duration of one wait and released on
    every exit path.
    """

    def __init__(
        self,
        display: DisplayFactory = null_display,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._display = display
        self._sleep = sleep

    async def wait(self, duration_seconds: int, on_tick: TickCallback | None = None) -> None:
        """Wait ``duration_seconds``, invoking the display once per second.

        Args:
            duration_seconds: Whole seconds to wait; 0 returns immediately
            on_tick: Extra callback receiving (elapsed fraction, remaining text)
        """
        if duration_seconds <= 0:
            return

        with self._display() as report:
            for elapsed in range(duration_seconds):
                fraction = elapsed / duration_seconds
                remaining = format_interval(duration_seconds - elapsed)
                report(fraction, remaining)
                if on_tick is not None:
                    on_tick(fraction, remaining)
                await self._sleep(TICK_SECONDS)
