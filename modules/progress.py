"""
Progress ticker - cycles human-readable status text while a remote job runs.

The ticker knows nothing about the job itself. It fires on a fixed interval
until stopped and is meant to be used as a context manager so the thread
never outlives the call that started it.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional, Sequence

from .config import LOADING_MESSAGES, PROGRESS_INTERVAL_SECONDS
from .utils import get_logger

logger = get_logger("progress")


class ProgressTicker:
    def __init__(
        self,
        on_progress: Callable[[str], None],
        messages: Sequence[str] = LOADING_MESSAGES,
        interval: float = PROGRESS_INTERVAL_SECONDS,
        attach_thread: Optional[Callable[[threading.Thread], None]] = None,
    ):
        if not messages:
            raise ValueError("ProgressTicker needs at least one message")
        self._on_progress = on_progress
        self._messages = tuple(messages)
        self._interval = interval
        self._attach_thread = attach_thread
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "ProgressTicker":
        if self._thread is not None:
            raise RuntimeError("ProgressTicker already started")
        self._thread = threading.Thread(
            target=self._run, name="progress-ticker", daemon=True
        )
        if self._attach_thread:
            self._attach_thread(self._thread)
        self._thread.start()
        return self

    def stop(self) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            message = self._messages[self.ticks % len(self._messages)]
            self.ticks += 1
            try:
                self._on_progress(message)
            except Exception as exc:
                logger.warning(f"Progress callback failed: {exc}")

    def __enter__(self) -> "ProgressTicker":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
