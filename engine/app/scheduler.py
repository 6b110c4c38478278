from __future__ import annotations
import logging
from typing import Callable, List

log = logging.getLogger(__name__)


class RepeatingTask:
    """
    Handle for a callback fired every `interval_ms` of frame time.
    Owned by whoever scheduled it; cancel() stops it for good.
    """

    def __init__(self, interval_ms: float, callback: Callable[[], None]):
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        self.interval_ms = interval_ms
        self.callback = callback
        self._elapsed_ms: float = 0.0
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def _advance(self, dt_ms: float) -> None:
        self._elapsed_ms += dt_ms
        while self._active and self._elapsed_ms >= self.interval_ms:
            self._elapsed_ms -= self.interval_ms
            self.callback()


class FrameScheduler:
    """
    Repeating timers driven by the frame loop. The loop calls advance(dt_ms)
    once per frame; nothing fires between frames.
    """

    def __init__(self):
        self._tasks: List[RepeatingTask] = []

    def schedule_repeating(self, interval_ms: float, callback: Callable[[], None]) -> RepeatingTask:
        task = RepeatingTask(interval_ms, callback)
        self._tasks.append(task)
        log.debug("scheduled task every %sms (%d active)", interval_ms, len(self._tasks))
        return task

    def advance(self, dt_ms: float) -> None:
        # snapshot: tasks scheduled from a callback start on the next frame
        for task in list(self._tasks):
            if task.active:
                task._advance(dt_ms)
        self._tasks = [t for t in self._tasks if t.active]

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()

    def __len__(self) -> int:
        return sum(1 for t in self._tasks if t.active)
