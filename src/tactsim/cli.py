from __future__ import annotations

# ---- Environment bootstrap (MUST be first) ----
from dotenv import load_dotenv

# Load .env once at process start
load_dotenv()

# ---- CLI / Simulation imports ----
import random
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from .config import SimConfig
from .intake.generator import generate_tasks
from .intake.parser import load_tasks, parse_task
from .interactive import drive, interactive_loop
from .schemas import Task
from .shell import BoardShell
from .utils.ui import setup_logging


app = typer.Typer(add_completion=False, help="Two-stage tact scheduler (stack -> P1 -> queue -> P2)")


def _collect_tasks(
    generate: Optional[int],
    task: Optional[List[str]],
    tasks_file: Optional[Path],
    seed: Optional[int],
) -> Optional[List[Task]]:
    if generate is None and not task and tasks_file is None:
        return None

    tasks: List[Task] = []
    if tasks_file is not None:
        try:
            tasks.extend(load_tasks(tasks_file))
        except (OSError, ValueError, ValidationError) as e:
            raise typer.BadParameter(str(e), param_hint="--tasks-file")
    for text in task or []:
        try:
            tasks.append(parse_task(text))
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--task")
    if generate is not None:
        rng = random.Random(seed) if seed is not None else None
        tasks.extend(generate_tasks(generate, rng))
    return tasks


@app.callback(invoke_without_command=True)
def main(
    generate: Optional[int] = typer.Option(None, "--generate", "-g", min=0, help="Generate N random tasks"),
    task: Optional[List[str]] = typer.Option(None, "--task", "-t", help="Task as id:tacts (repeatable)"),
    tasks_file: Optional[Path] = typer.Option(None, "--tasks-file", help="JSON list of {id, tacts}"),
    stack_capacity: Optional[int] = typer.Option(None, min=0, help="Stack capacity (default: task count)"),
    queue_capacity: Optional[int] = typer.Option(None, min=0, help="Queue capacity (default: task count)"),
    step: bool = typer.Option(False, "--step", help="Pause after every tact"),
    max_tacts: Optional[int] = typer.Option(None, min=1, help="Stop a run that has not finished after N tacts"),
    seed: Optional[int] = typer.Option(None, help="Seed for generated task durations"),
    runs_dir: Optional[str] = typer.Option(None, help="Where run artifacts are written"),
    no_artifacts: bool = typer.Option(False, "--no-artifacts", help="Do not write a run directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scheduler diagnostics"),
    shell: bool = typer.Option(False, "--shell", help="Drive the board by hand"),
):
    """
    Tact scheduler: backlog -> stack -> P1 -> queue -> P2
    """
    overrides = {
        "stack_capacity": stack_capacity,
        "queue_capacity": queue_capacity,
        "max_tacts": max_tacts,
        "seed": seed,
        "runs_dir": runs_dir,
    }
    cfg = SimConfig()
    cfg = cfg.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    if step:
        cfg.step_mode = True
    if no_artifacts:
        cfg.write_artifacts = False
    if verbose:
        cfg.log_level = "DEBUG"
    setup_logging(cfg.log_level)

    tasks = _collect_tasks(generate, task, tasks_file, cfg.seed)

    if shell:
        BoardShell(cfg, tasks or []).run()
        return

    if tasks is None:
        result = interactive_loop(cfg)
    else:
        result = drive(cfg, tasks)

    if not result.done:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
