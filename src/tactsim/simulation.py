from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import SimConfig
from .logger import EventLogger
from .run_manager import new_run_dir, write_json, init_status, update_status, write_report_md
from .scheduler import Scheduler
from .schemas import RunStatus, SimulationResult, TactReport, Task
from .utils.render import render_report
from .validators.board_validator import validate_report

logger = logging.getLogger(__name__)

ReportHook = Callable[[TactReport], None]


def run_simulation(
    cfg: SimConfig,
    tasks: Sequence[Task],
    on_report: Optional[ReportHook] = None,
) -> SimulationResult:
    """
    Run the board until Done (or until cfg.max_tacts tacts have run).

    Per tact:
      1) scheduler.step()
      2) invariant check (cfg.check_invariants)
      3) on_report hook (rendering / step-mode pause live there)

    With cfg.write_artifacts the run directory receives config.json,
    input.json, logs.jsonl, status.json, summary.json and report.md.
    """
    stack_capacity, queue_capacity = cfg.resolve_capacities(len(tasks))

    run_dir: Optional[Path] = None
    event_logger: Optional[EventLogger] = None
    status: Optional[RunStatus] = None
    if cfg.write_artifacts:
        run_dir = new_run_dir(cfg, f"s{stack_capacity}-q{queue_capacity}-n{len(tasks)}")
        event_logger = EventLogger(log_path=run_dir / "logs.jsonl")
        status = init_status(run_dir)
        write_json(run_dir / "config.json", cfg.model_dump())
        write_json(run_dir / "input.json", [t.model_dump() for t in tasks])
        run_id = run_dir.name
    else:
        run_id = time.strftime("%Y-%m-%d_%H%M%S", time.localtime())

    scheduler = Scheduler(stack_capacity, queue_capacity, event_logger=event_logger)
    scheduler.submit(tasks)

    transcript: List[str] = []
    logger.info(
        f"Run {run_id}: {len(tasks)} tasks, stack={stack_capacity}, queue={queue_capacity}"
    )
    if event_logger is not None:
        event_logger.log("simulation", "start", {
            "tasks": len(tasks),
            "stack_capacity": stack_capacity,
            "queue_capacity": queue_capacity,
        })
    if status is not None:
        status.state = "running"
        update_status(run_dir, status)

    try:
        while not scheduler.is_done() and scheduler.tact < cfg.max_tacts:
            report = scheduler.step()
            if cfg.check_invariants:
                validate_report(report, scheduler.submitted, stack_capacity, queue_capacity)
            if cfg.write_artifacts:
                transcript.extend(render_report(report))
                transcript.append("")
            if on_report is not None:
                on_report(report)
    except Exception as e:
        if status is not None:
            status.state = "fail"
            status.tacts = scheduler.tact
            status.completed = len(scheduler.completed)
            status.error = {"tact": str(scheduler.tact - 1), "message": str(e)}
            event_logger.log("simulation", "fail", {"error": str(e)}, tact=scheduler.tact - 1)
            update_status(run_dir, status)
        raise

    done = scheduler.is_done()
    result = SimulationResult(
        run_id=run_id,
        run_dir=str(run_dir) if run_dir is not None else None,
        stack_capacity=stack_capacity,
        queue_capacity=queue_capacity,
        submitted=scheduler.submitted,
        tacts=scheduler.tact,
        finished=list(scheduler.completed),
        done=done,
        stalled=not done,
    )

    if not done:
        logger.warning(
            f"Run {run_id} stopped after {cfg.max_tacts} tacts without reaching Done "
            f"({len(scheduler.completed)}/{scheduler.submitted} finished)"
        )

    if run_dir is not None:
        status.state = "done" if done else "stalled"
        status.tacts = scheduler.tact
        status.completed = len(scheduler.completed)
        update_status(run_dir, status)
        write_json(run_dir / "summary.json", result.model_dump())
        write_report_md(run_dir, _render_report_md(result, transcript))
        event_logger.log("simulation", "done" if done else "stalled", {
            "tacts": scheduler.tact,
            "finished": len(scheduler.completed),
        })

    return result


def _render_report_md(result: SimulationResult, transcript: List[str]) -> str:
    lines = []
    lines.append("# Tact Simulation Report\n")
    lines.append(f"- **Run**: {result.run_id}")
    lines.append(f"- **Stack capacity**: {result.stack_capacity}")
    lines.append(f"- **Queue capacity**: {result.queue_capacity}")
    lines.append(f"- **Tasks submitted**: {result.submitted}")
    lines.append(f"- **Tacts**: {result.tacts}")
    lines.append(f"- **Outcome**: {'done' if result.done else 'stalled'}\n")

    lines.append("## Completion Order\n")
    for i, t in enumerate(result.finished, 1):
        lines.append(f"{i}. {t}")

    lines.append("\n## Transcript\n")
    lines.append("```")
    lines.extend(transcript)
    lines.append("```")
    lines.append("")
    return "\n".join(lines)
