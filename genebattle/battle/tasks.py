"""Cancellable scheduled callbacks for presentation delays.

AI "thinking" pauses and automatic turn transitions are the only timed
work around a battle. They are all registered here so a reset can
disown every outstanding callback at once: cancelling bumps the
registry generation, and a timer that already fired but belongs to an
older generation becomes a no-op instead of touching a torn-down battle.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional
import itertools
import threading

from genebattle.core.logging import logger

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class ScheduledTask:
    def __init__(self, registry: "TaskRegistry", task_id: int, name: str, generation: int,
                 callback: Callable[[], None]):
        self._registry = registry
        self.task_id = task_id
        self.name = name
        self.generation = generation
        self._callback = callback
        self._timer: Optional[threading.Timer] = None
        self.cancelled = False
        self.done = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self) -> bool:
        """Cancel the task. Returns False if it already ran or was cancelled."""
        with self._registry._lock:
            if not self.pending:
                return False
            self.cancelled = True
            self._registry._tasks.pop(self.task_id, None)
        if self._timer is not None:
            self._timer.cancel()
        return True

    def _fire(self) -> None:
        with self._registry._lock:
            if not self.pending or self.generation != self._registry.generation:
                return
            self.done = True
            self._registry._tasks.pop(self.task_id, None)
        try:
            self._callback()
        except Exception as e:
            logger.error("ScheduledTaskFailed", task=self.name, error=repr(e))
            raise

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "done" if self.done else "pending"
        return f"ScheduledTask({self.name}#{self.task_id} {state})"


class TaskRegistry:
    def __init__(self, timer_factory: Optional[TimerFactory] = None):
        self._timer_factory = timer_factory or threading.Timer
        self._lock = threading.Lock()
        self._tasks: Dict[int, ScheduledTask] = {}
        self._ids = itertools.count(1)
        self.generation = 0

    def schedule(self, name: str, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        with self._lock:
            task = ScheduledTask(self, next(self._ids), name, self.generation, callback)
            self._tasks[task.task_id] = task
        timer = self._timer_factory(max(0.0, delay), task._fire)
        timer.daemon = True
        task._timer = timer
        timer.start()
        logger.debug("TaskScheduled", task=name, delay=delay)
        return task

    def pending(self) -> List[ScheduledTask]:
        with self._lock:
            return list(self._tasks.values())

    def cancel(self, name: str) -> int:
        count = 0
        for task in self.pending():
            if task.name == name and task.cancel():
                count += 1
        return count

    def cancel_all(self) -> int:
        with self._lock:
            self.generation += 1
            tasks = list(self._tasks.values())
            self._tasks.clear()
            for task in tasks:
                task.cancelled = True
        for task in tasks:
            if task._timer is not None:
                task._timer.cancel()
        if tasks:
            logger.debug("TasksCancelled", count=len(tasks))
        return len(tasks)


__all__ = ["ScheduledTask", "TaskRegistry"]
