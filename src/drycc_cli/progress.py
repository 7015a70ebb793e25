"""Animated in-place spinner shown while a controller call is in flight."""

from __future__ import annotations

import itertools
import threading
from typing import IO, Optional

FRAMES = ("...", "o..", ".o.", "..o")
BACKSPACES = "\b" * 3
TICK = 0.4


class ProgressToken:
    """Handle on one running spinner.

    Each frame is written and then erased with three backspaces, either
    when the tick elapses or when ``stop()`` is called. ``stop()`` blocks
    until the worker has written the final backspaces, so nothing the
    caller prints afterwards interleaves with a frame.

    Use as a context manager to stop on every exit path::

        with ProgressToken(out).start():
            apps.delete(client, app_id)
    """

    def __init__(self, writer: IO[str], interval: float = TICK) -> None:
        self._writer = writer
        self._interval = interval
        self._quit = threading.Event()
        self._stopped = False
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "ProgressToken":
        self._thread = threading.Thread(target=self._spin, name="drycc-progress", daemon=True)
        self._thread.start()
        return self

    def _write(self, text: str) -> None:
        self._writer.write(text)
        flush = getattr(self._writer, "flush", None)
        if flush is not None:
            flush()

    def _spin(self) -> None:
        for frame in itertools.cycle(FRAMES):
            self._write(frame)
            quit_requested = self._quit.wait(self._interval)
            self._write(BACKSPACES)
            if quit_requested:
                return

    def stop(self) -> None:
        """Signal the worker and wait for its final clear sequence.

        Raises:
            RuntimeError: The token was already stopped.
        """
        if self._stopped:
            raise RuntimeError("progress token already stopped")
        self._stopped = True
        self._quit.set()
        if self._thread is not None:
            self._thread.join()

    @property
    def stopped(self) -> bool:
        return self._stopped

    def __enter__(self) -> "ProgressToken":
        if self._thread is None:
            self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        if not self._stopped:
            self.stop()


def start(writer: IO[str], interval: float = TICK) -> ProgressToken:
    """Start a spinner on ``writer`` and return its token."""
    return ProgressToken(writer, interval).start()
