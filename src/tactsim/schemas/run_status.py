from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .core import Task


RunState = Literal["pending", "running", "done", "stalled", "fail"]


class RunStatus(BaseModel):
    run_id: str
    state: RunState = "pending"
    tacts: int = 0
    completed: int = 0
    error: Optional[Dict[str, str]] = None


class SimulationResult(BaseModel):
    run_id: str
    run_dir: Optional[str] = None
    stack_capacity: int
    queue_capacity: int
    submitted: int
    tacts: int
    finished: List[Task] = Field(default_factory=list)
    done: bool
    stalled: bool = False
