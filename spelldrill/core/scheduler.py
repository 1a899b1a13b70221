"""Delayed, cancellable callbacks used for success-advance and error recovery."""

from __future__ import annotations

from typing import Callable, List


class ScheduledTask:
    """Handle for a callback that runs once after a delay unless cancelled."""

    def __init__(self, callback: Callable[[], None], due_ms: int) -> None:
        self._callback = callback
        self.due_ms = due_ms
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def fire(self) -> None:
        if not self._active:
            return
        self._active = False
        self._callback()


class Scheduler:
    """Base scheduler. Backends override :meth:`call_later`."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        raise NotImplementedError

    def close(self) -> None:
        """Cancel everything still pending."""


class ManualScheduler(Scheduler):
    """Scheduler driven by an explicit clock, for headless runs and tests.

    Time only moves when :meth:`advance` is called; due tasks run in due order,
    ties in scheduling order.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._tasks: List[ScheduledTask] = []

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if t.active)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback, self._now_ms + max(0, int(delay_ms)))
        self._tasks.append(task)
        return task

    def advance(self, ms: int) -> None:
        target = self._now_ms + max(0, int(ms))
        while True:
            due = [t for t in self._tasks if t.active and t.due_ms <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.due_ms)
            self._now_ms = max(self._now_ms, task.due_ms)
            task.fire()
        self._now_ms = target
        self._tasks = [t for t in self._tasks if t.active]

    def close(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks = []
