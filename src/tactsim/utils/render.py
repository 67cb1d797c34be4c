"""
Board Rendering.
Turns a TactReport into plain text lines, one container per line.
"""
from __future__ import annotations

from typing import List, Sequence

from ..schemas import ProcessorStatus, TactReport, Task


def _join(tasks: Sequence[Task]) -> str:
    return ", ".join(str(t) for t in tasks)


def render_processor(status: ProcessorStatus) -> str:
    if status.task is None:
        return f"Processor {status.name} is idle"
    if status.state == "completed":
        return (
            f"Processor {status.name} completed {status.task} "
            f"{status.elapsed}/{status.task.tacts}"
        )
    return f"Processor {status.name} is running {status.task} {status.elapsed}/{status.task.tacts}"


def render_report(report: TactReport) -> List[str]:
    """
    Layout (top to bottom follows the data flow):
      Tact N
      [backlog]
      Stack[top, ..., bottom]
      Processor P1 ...
      Queue[next, ..., last]
      Processor P2 ...
      <errors and finished tasks>
    """
    lines = [f"Tact {report.tact}"]
    lines.append(f"[{_join(report.backlog)}]")
    lines.append(f"Stack[{_join(report.stack)}]")
    lines.append(render_processor(report.processor("P1")))
    lines.append(f"Queue[{_join(report.queue)}]")
    lines.append(render_processor(report.processor("P2")))

    for ev in report.events:
        if ev.kind == "stack_full":
            lines.append(f"Error adding to stack: {ev.message}")
        elif ev.kind == "queue_full":
            lines.append(f"Error adding to queue: {ev.message}")
        elif ev.kind == "finished":
            lines.append(f"Task finished: {ev.task}")
    return lines
