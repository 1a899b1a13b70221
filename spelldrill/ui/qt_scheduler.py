"""QTimer-backed scheduler for the practice engine's delayed transitions."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

from spelldrill.core.scheduler import ScheduledTask, Scheduler


class _QtTask(ScheduledTask):
    def __init__(self, callback: Callable[[], None], timer: QTimer) -> None:
        super().__init__(callback, due_ms=timer.interval())
        self._timer = timer

    def cancel(self) -> None:
        super().cancel()
        self._timer.stop()
        self._timer.deleteLater()

    def fire(self) -> None:
        super().fire()
        self._timer.deleteLater()


class QtScheduler(Scheduler):
    """One single-shot QTimer per task, parented to *parent* so they die with it."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent
        self._tasks: list[_QtTask] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setInterval(max(0, int(delay_ms)))
        task = _QtTask(callback, timer)
        timer.timeout.connect(task.fire)
        self._tasks = [t for t in self._tasks if t.active]
        self._tasks.append(task)
        timer.start()
        return task

    def close(self) -> None:
        for task in self._tasks:
            if task.active:
                task.cancel()
        self._tasks = []
