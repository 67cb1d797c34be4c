from __future__ import annotations

from ..schemas import TactReport


def validate_report(
    report: TactReport,
    total_submitted: int,
    stack_capacity: int,
    queue_capacity: int,
) -> None:
    """
    Make a tact checkable:
    - stack and queue never exceed their capacities
    - no task is lost or duplicated (conservation)
    - a processor's elapsed counter never exceeds its task's duration
    """
    if len(report.stack) > stack_capacity:
        raise ValueError(
            f"Tact {report.tact}: stack holds {len(report.stack)} tasks, capacity {stack_capacity}"
        )
    if len(report.queue) > queue_capacity:
        raise ValueError(
            f"Tact {report.tact}: queue holds {len(report.queue)} tasks, capacity {queue_capacity}"
        )

    busy = 0
    for p in report.processors:
        if p.task is None:
            if p.state != "idle":
                raise ValueError(f"Tact {report.tact}: processor {p.name} is {p.state} without a task")
            continue
        busy += 1
        if p.elapsed > p.task.tacts:
            raise ValueError(
                f"Tact {report.tact}: processor {p.name} elapsed {p.elapsed} exceeds {p.task.tacts}"
            )

    accounted = (
        len(report.backlog)
        + len(report.stack)
        + len(report.queue)
        + busy
        + report.completed_count
    )
    if accounted != total_submitted:
        raise ValueError(
            f"Tact {report.tact}: {accounted} tasks accounted for, {total_submitted} submitted"
        )
