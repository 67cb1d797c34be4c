"""
Run directory helpers: naming, JSON artifacts, status and the markdown report.
"""
from __future__ import annotations

import json
import re
import time
from pathlib import Path
from typing import Any

from .config import SimConfig
from .schemas import RunStatus


def _slugify(text: str, max_len: int = 32) -> str:
    text = text.strip().lower()
    text = re.sub(r"[^a-z0-9\-_ ]+", "", text)
    text = re.sub(r"\s+", "-", text)
    return text[:max_len] if len(text) > max_len else text


def new_run_dir(cfg: SimConfig, label: str) -> Path:
    """
    Create the output directory for one simulation run.

    Named <runs_dir>/YYYY-MM-DD_HHMMSS_<label slug>; two runs started in the
    same second with the same capacities get -2, -3, ... appended.
    """
    ts = time.strftime("%Y-%m-%d_%H%M%S", time.localtime())
    run_id = f"{ts}_{_slugify(label)}"
    run_dir = Path(cfg.runs_dir) / run_id
    n = 2
    while run_dir.exists():
        run_dir = Path(cfg.runs_dir) / f"{run_id}-{n}"
        n += 1
    run_dir.mkdir(parents=True)
    return run_dir


def write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)


def init_status(run_dir: Path) -> RunStatus:
    status = RunStatus(run_id=run_dir.name)
    write_json(run_dir / "status.json", status.model_dump())
    return status


def update_status(run_dir: Path, status: RunStatus) -> None:
    write_json(run_dir / "status.json", status.model_dump())


def write_report_md(run_dir: Path, report_md: str) -> None:
    (run_dir / "report.md").write_text(report_md, encoding="utf-8")
