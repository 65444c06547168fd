"""Cancellable one-shot and repeating tasks on background threads."""
import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> ScheduledTask: ...

    def call_every(self, interval_sec: float, callback: Callable[[], None]) -> ScheduledTask: ...


class _TimerTask:
    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class _IntervalTask:
    """Calls callback every interval until canceled. cancel() never joins, so a
    callback may cancel its own task."""

    def __init__(self, interval_sec: float, callback: Callable[[], None]) -> None:
        self._stop = threading.Event()
        self._interval_sec = interval_sec
        self._callback = callback
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def _loop(self) -> None:
        while not self._stop.wait(timeout=self._interval_sec):
            try:
                self._callback()
            except Exception as e:
                logger.warning("Scheduled task failed: %s", e)
                return

    def cancel(self) -> None:
        self._stop.set()


class ThreadScheduler:
    """Default scheduler: threading.Timer for one-shots, a daemon loop for intervals."""

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(delay_sec, callback)
        timer.daemon = True
        timer.start()
        return _TimerTask(timer)

    def call_every(self, interval_sec: float, callback: Callable[[], None]) -> ScheduledTask:
        return _IntervalTask(interval_sec, callback)
