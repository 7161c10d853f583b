"""Terminal spinner shown while the chunk corpus loads."""

from __future__ import annotations

import itertools
import sys
import threading
import time
from contextlib import AbstractContextManager
from typing import Optional, TextIO


class Spinner(AbstractContextManager["Spinner"]):
    """Animate `message` with elapsed seconds until the block exits.

    Rendering happens on a daemon thread; the wrapped work stays on the
    caller's thread.
    """

    def __init__(
        self,
        message: str = "",
        interval: float = 0.1,
        enabled: bool = True,
        final_message: Optional[str] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.message = message
        self.interval = interval
        self.enabled = enabled
        self.final_message = final_message
        self.stream = stream if stream is not None else sys.stdout
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._started_at = 0.0
        self._line_width = 0

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._started_at if self._started_at else 0.0

    def __enter__(self) -> "Spinner":
        self._started_at = time.monotonic()
        if self.enabled:
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.enabled:
            return
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
        self._write("\r" + " " * self._line_width + "\r")
        if self.final_message and exc_type is None:
            self._write(f"{self.final_message}\n")

    def _run(self) -> None:
        for symbol in itertools.cycle("|/-\\"):
            if self._stop_event.is_set():
                break
            frame = f"{self.message} {symbol} {self.elapsed:.0f}s".strip()
            self._line_width = max(self._line_width, len(frame))
            self._write(f"\r{frame}")
            time.sleep(self.interval)

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()


__all__ = ["Spinner"]
