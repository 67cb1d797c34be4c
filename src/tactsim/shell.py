from __future__ import annotations

import json
import random
import sys
from typing import List, Optional

from .config import SimConfig
from .intake.generator import generate_tasks
from .intake.parser import parse_task
from .scheduler import Scheduler
from .schemas import TactReport, Task
from .utils.render import render_report
from .validators.board_validator import validate_report


# ---------- Terminal styling ----------

# SGR codes per message kind; plain text when stdout is not a terminal
_SGR = {
    "ok": "32;1",
    "warn": "33;1",
    "err": "31;1",
    "title": "36;1",
    "dim": "2",
    "prompt": "35;1",
}


def paint(text: str, kind: str) -> str:
    if not sys.stdout.isatty():
        return text
    return f"\x1b[{_SGR[kind]}m{text}\x1b[0m"


def badge(kind: str, msg: str) -> str:
    """Prefix `msg` with a tag such as [OK], [WARN] or [ERR]."""
    return paint(f"[{kind.upper()}] ", kind) + msg


def rule() -> str:
    return paint("\u2500" * 60, "dim")


# ---------- Shell ----------

class BoardShell:
    """
    Step the board by hand.

    Tasks added before the first step are submitted together; later /add and
    /gen calls go straight into the live backlog. Capacities are fixed once
    the scheduler exists; /reset drops it.
    """

    def __init__(self, cfg: Optional[SimConfig] = None, tasks: Optional[List[Task]] = None):
        self.cfg = cfg or SimConfig()
        self.pending: List[Task] = list(tasks or [])
        self.scheduler: Optional[Scheduler] = None
        self.last_report: Optional[TactReport] = None
        self.rng = random.Random(self.cfg.seed) if self.cfg.seed is not None else random.Random()

    def run(self) -> None:
        print(paint("Tact Scheduler", "title"))
        print(paint("Type /help for commands. Empty line runs one tact.\n", "dim"))

        while True:
            try:
                line = input(paint("tact> ", "prompt")).strip()
            except (EOFError, KeyboardInterrupt):
                print()
                return

            if not line:
                self._cmd_step([])
                continue

            if line.startswith("/"):
                if self._handle_command(line):
                    return
                continue

            print(badge("err", f"Unknown input: {line}. Try /help"))

    def _handle_command(self, line: str) -> bool:
        parts = line[1:].strip().split()
        cmd = (parts[0].lower() if parts else "")
        args = parts[1:]

        if cmd in ("exit", "quit"):
            return True

        handlers = {
            "help": self._cmd_help,
            "add": self._cmd_add,
            "gen": self._cmd_gen,
            "set": self._cmd_set,
            "step": self._cmd_step,
            "run": self._cmd_run,
            "show": self._cmd_show,
            "reset": self._cmd_reset,
        }
        handler = handlers.get(cmd)
        if handler is None:
            print(badge("err", f"Unknown command: /{cmd}. Try /help"))
            return False

        if cmd == "help":
            handler()
        else:
            handler(args)
        return False

    # ------------------------------------------------------------
    def _ensure_scheduler(self) -> Scheduler:
        if self.scheduler is None:
            stack_capacity, queue_capacity = self.cfg.resolve_capacities(len(self.pending))
            self.scheduler = Scheduler(stack_capacity, queue_capacity)
            self.scheduler.submit(self.pending)
            self.pending = []
        return self.scheduler

    def _nothing_to_run(self) -> bool:
        # capacities default to the task count, so an empty board is not built yet
        if self.scheduler is None and not self.pending:
            print(badge("warn", "No tasks yet. /add or /gen some first"))
            return True
        if self.scheduler is not None and self.scheduler.is_done():
            print(badge("ok", "Board is done. /add or /gen more tasks, or /reset"))
            return True
        return False

    def _add(self, tasks: List[Task]) -> None:
        if self.scheduler is None:
            self.pending.extend(tasks)
        else:
            self.scheduler.submit(tasks)

    def _print_report(self, report: TactReport) -> None:
        for line in render_report(report):
            print(line)

    # ------------------------------------------------------------
    def _cmd_help(self) -> None:
        print(rule())
        print(paint("Commands", "title"))
        print("  /add <id> <tacts>            Add one task to the backlog")
        print("  /gen <n>                     Generate n random tasks")
        print("  /set <key> <value>           Set config for this session")
        print("     keys: stack, queue, max_tacts (capacities only before the first step)")
        print("  /step [n]                    Run n tacts (default 1, empty line works too)")
        print("  /run                         Run until done or max_tacts")
        print("  /show board|config|tasks     Print current state")
        print("  /reset                       Drop the board, keep config")
        print("  /exit                        Quit")
        print(rule())

    def _cmd_add(self, args) -> None:
        if len(args) == 1:
            text = args[0]
        elif len(args) == 2:
            text = f"{args[0]}:{args[1]}"
        else:
            print(badge("err", "Usage: /add <id> <tacts>"))
            return
        try:
            task = parse_task(text)
        except ValueError as e:
            print(badge("err", str(e)))
            return
        self._add([task])
        print(badge("ok", f"Added {task}"))

    def _cmd_gen(self, args) -> None:
        try:
            n = int(args[0])
            tasks = generate_tasks(n, self.rng)
        except (IndexError, ValueError):
            print(badge("err", "Usage: /gen <n>"))
            return
        self._add(tasks)
        print(badge("ok", f"Generated {len(tasks)} tasks"))

    def _cmd_set(self, args) -> None:
        if len(args) != 2:
            print(badge("err", "Usage: /set <key> <value>"))
            return
        key = args[0].lower()

        try:
            value = int(args[1])
            if key in ("stack", "queue"):
                if self.scheduler is not None:
                    raise ValueError("capacities are fixed once the board has started; /reset first")
                if value < 0:
                    raise ValueError("capacity must be >= 0")
                setattr(self.cfg, f"{key}_capacity", value)
            elif key == "max_tacts":
                if value < 1:
                    raise ValueError("max_tacts must be >= 1")
                self.cfg.max_tacts = value
            else:
                raise ValueError(f"Unknown key: {key}")

            print(badge("ok", f"Set {key} = {value}"))
        except ValueError as e:
            print(badge("err", str(e)))

    def _step_once(self) -> TactReport:
        sched = self._ensure_scheduler()
        report = sched.step()
        if self.cfg.check_invariants:
            validate_report(report, sched.submitted, sched.stack.capacity, sched.queue.capacity)
        self.last_report = report
        return report

    def _cmd_step(self, args) -> None:
        try:
            n = int(args[0]) if args else 1
        except ValueError:
            print(badge("err", "Usage: /step [n]"))
            return

        for _ in range(n):
            if self._nothing_to_run():
                return
            self._print_report(self._step_once())
            print()

    def _cmd_run(self, args) -> None:
        if self._nothing_to_run():
            return
        sched = self._ensure_scheduler()
        limit = sched.tact + self.cfg.max_tacts
        while not sched.is_done() and sched.tact < limit:
            self._print_report(self._step_once())
            print()
        if sched.is_done():
            print(badge("ok", f"Work complete after {sched.tact} tacts"))
        else:
            print(badge("warn", f"Stopped after {self.cfg.max_tacts} tacts without finishing"))

    def _cmd_show(self, args) -> None:
        what = args[0].lower() if args else "board"

        if what == "config":
            print(json.dumps(self.cfg.model_dump(), ensure_ascii=False, indent=2))
            return

        if what == "tasks":
            sched = self.scheduler
            pending = self.pending if sched is None else list(sched.backlog)
            print(f"[{', '.join(str(t) for t in pending)}]")
            if sched is not None:
                print(paint(f"finished: {len(sched.completed)}/{sched.submitted}", "dim"))
            return

        if what == "board":
            if self.last_report is None:
                print(badge("warn", "No tacts yet. Press Enter or use /step."))
                return
            self._print_report(self.last_report)
            return

        print(badge("err", "Usage: /show board|config|tasks"))

    def _cmd_reset(self, args) -> None:
        self.scheduler = None
        self.last_report = None
        self.pending = []
        print(badge("ok", "Board cleared"))
