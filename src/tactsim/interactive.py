from __future__ import annotations

import random
from typing import Dict, List, Optional, TypeVar

import typer

from .config import SimConfig
from .intake.generator import generate_tasks, new_task_id
from .schemas import SimulationResult, TactReport, Task
from .simulation import run_simulation
from .utils.ui import console, print_header, print_report

T = TypeVar("T")


def read_count(question: str, default: Optional[int] = None) -> int:
    """Ask until a non-negative integer (or the default) is given."""
    while True:
        answer = typer.prompt(
            question,
            default="" if default is None else str(default),
            show_default=default is not None,
        ).strip()
        try:
            n = int(answer)
        except ValueError:
            continue
        if n >= 0:
            return n


def read_choice(question: str, choices: Dict[str, T]) -> T:
    while True:
        answer = typer.prompt(question).strip()
        if answer in choices:
            return choices[answer]


def drive(cfg: SimConfig, tasks: List[Task]) -> SimulationResult:
    """Run the board, printing every tact and pausing in step mode."""

    def on_report(report: TactReport) -> None:
        print_report(report)
        if cfg.step_mode and not report.done:
            typer.pause("Press any key for the next tact...")
        else:
            console.print()

    result = run_simulation(cfg, tasks, on_report=on_report)
    if result.done:
        console.print("Work complete", style="bold green")
    else:
        console.print(
            f"Stopped after {result.tacts} tacts without finishing "
            f"({len(result.finished)}/{result.submitted} tasks done)",
            style="bold yellow",
        )
    if result.run_dir:
        console.print(f"[dim]outputs at: {result.run_dir}[/dim]")
    return result


def interactive_loop(cfg: SimConfig) -> SimulationResult:
    print_header("Tact Scheduler", "backlog -> stack -> P1 -> queue -> P2")

    generate = read_choice(
        "Do you want to (1) generate tasks or (2) enter them yourself?",
        {"1": True, "2": False},
    )

    if generate:
        n = read_count("How many tasks should be generated")
        rng = random.Random(cfg.seed) if cfg.seed is not None else None
        tasks = generate_tasks(n, rng)
    else:
        n = read_count("How many tasks do you want to enter")
        tasks = []
        for _ in range(n):
            task_id = typer.prompt(
                "Task ID (empty generates a UUID)", default="", show_default=False
            ).strip()
            while True:
                tacts = read_count("Tacts needed to run the task")
                if tacts >= 1:
                    break
            tasks.append(Task(id=task_id or new_task_id(), tacts=tacts))

    console.print(f"[{', '.join(str(t) for t in tasks)}]", markup=False, highlight=False, soft_wrap=True)

    stack_capacity = read_count(
        "Maximum number of tasks on the stack (default: number of tasks)",
        cfg.stack_capacity if cfg.stack_capacity is not None else len(tasks),
    )
    queue_capacity = read_count(
        "Maximum number of tasks in the queue (default: number of tasks)",
        cfg.queue_capacity if cfg.queue_capacity is not None else len(tasks),
    )
    step_mode = read_choice(
        "Enable step-by-step output per tact? (1 - yes, 0 - no)",
        {"1": True, "0": False},
    )

    run_cfg = cfg.model_copy(update={
        "stack_capacity": stack_capacity,
        "queue_capacity": queue_capacity,
        "step_mode": step_mode,
    })
    return drive(run_cfg, tasks)
