from __future__ import annotations

from typing import Optional

from .errors import ProtocolViolation
from .schemas import ProcessorStatus, TactEvent, Task


class Processor:
    """
    Single-slot execution unit.

    Holds at most one task plus an elapsed-tacts counter that resets to 0 on
    assignment. The task is complete once elapsed reaches its duration; a
    complete task is never advanced past that point.
    """

    def __init__(self, name: str):
        self.name = name
        self._task: Optional[Task] = None
        self._elapsed = 0

    @property
    def task(self) -> Optional[Task]:
        return self._task

    @property
    def elapsed(self) -> int:
        return self._elapsed

    def is_busy(self) -> bool:
        return self._task is not None

    def is_complete(self) -> bool:
        return self._task is not None and self._elapsed == self._task.tacts

    def assign(self, task: Task) -> None:
        if self.is_busy() and not self.is_complete():
            raise ProtocolViolation(
                f"Processor {self.name} is still running {self._task} "
                f"({self._elapsed}/{self._task.tacts})"
            )
        self._elapsed = 0
        self._task = task

    def release(self) -> Task:
        if self._task is None:
            raise ProtocolViolation(f"Processor {self.name} has no task to release")
        task = self._task
        self._task = None
        self._elapsed = 0
        return task

    def advance_tact(self, tact: int) -> TactEvent:
        """Advance by one tact; call at most once per tact."""
        if self._task is None:
            return TactEvent(tact=tact, kind="idle", source=self.name)

        if self.is_complete():
            return TactEvent(
                tact=tact,
                kind="blocked",
                source=self.name,
                task=self._task,
                elapsed=self._elapsed,
                duration=self._task.tacts,
                message="completed task is waiting for hand-off",
            )

        before = self._elapsed
        self._elapsed += 1
        return TactEvent(
            tact=tact,
            kind="progress",
            source=self.name,
            task=self._task,
            elapsed=before,
            duration=self._task.tacts,
        )

    def status(self) -> ProcessorStatus:
        if self._task is None:
            state = "idle"
        elif self.is_complete():
            state = "completed"
        else:
            state = "running"
        return ProcessorStatus(name=self.name, state=state, task=self._task, elapsed=self._elapsed)
