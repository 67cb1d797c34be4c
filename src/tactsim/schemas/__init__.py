from __future__ import annotations

# board models
from .core import (
    Task,
    EventKind,
    ProcessorState,
    TactEvent,
    ProcessorStatus,
    TactReport,
)

# run models
from .run_status import (
    RunState,
    RunStatus,
    SimulationResult,
)


__all__ = [
    "Task",
    "EventKind",
    "ProcessorState",
    "TactEvent",
    "ProcessorStatus",
    "TactReport",
    "RunState",
    "RunStatus",
    "SimulationResult",
]
