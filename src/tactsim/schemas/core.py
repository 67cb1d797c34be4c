from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------- Input ----------
class Task(BaseModel):
    """
    Unit of work: an identifier and the number of tacts it needs.

    Immutable once created; moved between containers, never shared.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    tacts: int = Field(..., ge=1)

    def __str__(self) -> str:
        return f"Task(id={self.id}, tacts={self.tacts})"


# ---------- Per-tact observation ----------
EventKind = Literal[
    "assigned",    # processor picked up a task (steps 1 and 2)
    "enqueued",    # P1 output entered the queue
    "pushed",      # backlog head entered the stack
    "progress",    # processor advanced its task
    "blocked",     # processor holds a completed task it could not hand off
    "idle",        # processor had nothing to do
    "finished",    # task left the system at P2
    "stack_full",  # backlog head could not be pushed
    "queue_full",  # P1 output could not be enqueued
]

ProcessorState = Literal["idle", "running", "completed"]


class TactEvent(BaseModel):
    tact: int
    kind: EventKind
    source: str
    task: Optional[Task] = None
    elapsed: Optional[int] = None
    duration: Optional[int] = None
    message: str = ""


class ProcessorStatus(BaseModel):
    name: str
    state: ProcessorState = "idle"
    task: Optional[Task] = None
    elapsed: int = 0


class TactReport(BaseModel):
    """
    Snapshot of the board after one tact.

    Orderings:
    - backlog: head first
    - stack: top first
    - queue: FIFO (next to dequeue first)
    """
    tact: int
    backlog: List[Task] = Field(default_factory=list)
    stack: List[Task] = Field(default_factory=list)
    queue: List[Task] = Field(default_factory=list)
    processors: List[ProcessorStatus] = Field(default_factory=list)
    events: List[TactEvent] = Field(default_factory=list)
    finished: List[Task] = Field(default_factory=list)
    completed_count: int = 0
    done: bool = False

    def processor(self, name: str) -> ProcessorStatus:
        for p in self.processors:
            if p.name == name:
                return p
        raise KeyError(name)
