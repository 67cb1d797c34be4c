from __future__ import annotations

import os
from typing import Optional, Tuple

from pydantic import BaseModel, Field


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class SimConfig(BaseModel):
    """
    Global configuration for a simulation run.

    Notes:
    - Keep config serializable (JSON) for run reproducibility.
    - Capacities left unset fall back to the number of submitted tasks.
    """
    runs_dir: str = Field(default_factory=lambda: os.getenv("TACTSIM_RUNS_DIR", "runs"))

    # board
    stack_capacity: Optional[int] = Field(default_factory=lambda: _env_int("TACTSIM_STACK_CAPACITY"), ge=0)
    queue_capacity: Optional[int] = Field(default_factory=lambda: _env_int("TACTSIM_QUEUE_CAPACITY"), ge=0)

    # driver
    step_mode: bool = Field(default_factory=lambda: _env_flag("TACTSIM_STEP_MODE"))
    max_tacts: int = Field(default_factory=lambda: int(os.getenv("TACTSIM_MAX_TACTS", "10000")), ge=1)
    seed: Optional[int] = Field(default_factory=lambda: _env_int("TACTSIM_SEED"))

    check_invariants: bool = True
    write_artifacts: bool = Field(default_factory=lambda: _env_flag("TACTSIM_WRITE_ARTIFACTS", "1"))
    log_level: str = Field(default_factory=lambda: os.getenv("TACTSIM_LOG_LEVEL", "WARNING"))

    def resolve_capacities(self, task_count: int) -> Tuple[int, int]:
        stack = self.stack_capacity if self.stack_capacity is not None else task_count
        queue = self.queue_capacity if self.queue_capacity is not None else task_count
        return stack, queue


DEFAULT_CONFIG = SimConfig()
