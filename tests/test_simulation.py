import json
from pathlib import Path

import pytest

from tactsim import run_manager, simulation
from tactsim.simulation import run_simulation


def _read_json(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_run_writes_artifacts(cfg, make_tasks):
    tasks = make_tasks("A:1", "B:1")
    cfg = cfg.model_copy(update={"stack_capacity": 1, "queue_capacity": 1})
    seen = []
    result = run_simulation(cfg, tasks, on_report=seen.append)

    assert result.done and not result.stalled
    assert result.tacts == 7
    assert len(seen) == 7
    assert [t.id for t in result.finished] == ["A", "B"]

    run_dir = result.run_dir
    assert run_dir is not None
    run_dir = Path(run_dir)
    for name in ("config.json", "input.json", "logs.jsonl", "status.json", "summary.json", "report.md"):
        assert (run_dir / name).exists(), name

    status = _read_json(run_dir / "status.json")
    assert status["state"] == "done"
    assert status["tacts"] == 7
    assert status["completed"] == 2

    assert _read_json(run_dir / "input.json") == [{"id": "A", "tacts": 1}, {"id": "B", "tacts": 1}]

    events = [json.loads(line) for line in (run_dir / "logs.jsonl").read_text(encoding="utf-8").splitlines()]
    assert events[0]["event"] == "start"
    assert events[-1]["event"] == "done"
    assert sum(1 for e in events if e["event"] == "finished") == 2

    report_md = (run_dir / "report.md").read_text(encoding="utf-8")
    assert "**Outcome**: done" in report_md
    assert "Task finished: Task(id=B, tacts=1)" in report_md


def test_capacities_default_to_task_count(cfg, make_tasks):
    result = run_simulation(cfg, make_tasks("A:1", "B:2", "C:1"))
    assert (result.stack_capacity, result.queue_capacity) == (3, 3)
    assert result.done


def test_empty_input_is_done_without_tacts(cfg):
    result = run_simulation(cfg, [])
    assert result.done
    assert result.tacts == 0
    assert result.finished == []


def test_degenerate_capacity_stalls_at_max_tacts(cfg, make_tasks):
    cfg = cfg.model_copy(update={"stack_capacity": 0, "max_tacts": 20})
    result = run_simulation(cfg, make_tasks("A:1"))
    assert not result.done
    assert result.stalled
    assert result.tacts == 20
    status = _read_json(Path(result.run_dir) / "status.json")
    assert status["state"] == "stalled"


def test_no_artifacts(cfg, make_tasks, tmp_path):
    cfg = cfg.model_copy(update={"write_artifacts": False})
    result = run_simulation(cfg, make_tasks("A:2"))
    assert result.done
    assert result.run_dir is None
    assert not (tmp_path / "runs").exists()


def test_failure_is_recorded_and_reraised(cfg, make_tasks, monkeypatch):
    def boom(*args, **kwargs):
        raise ValueError("conservation broken")

    monkeypatch.setattr(simulation, "validate_report", boom)
    with pytest.raises(ValueError, match="conservation broken"):
        run_simulation(cfg, make_tasks("A:1"))

    (run_dir,) = list(Path(cfg.runs_dir).iterdir())
    status = _read_json(run_dir / "status.json")
    assert status["state"] == "fail"
    assert status["error"]["message"] == "conservation broken"


def test_run_dirs_started_in_same_second_do_not_collide(cfg, monkeypatch):
    monkeypatch.setattr(run_manager.time, "strftime", lambda fmt, t=None: "2026-01-01_000000")
    first = run_manager.new_run_dir(cfg, "s1-q1-n2")
    second = run_manager.new_run_dir(cfg, "s1-q1-n2")
    third = run_manager.new_run_dir(cfg, "S1 Q1 n2!")
    assert first.name == "2026-01-01_000000_s1-q1-n2"
    assert second.name == "2026-01-01_000000_s1-q1-n2-2"
    assert third.name == "2026-01-01_000000_s1-q1-n2-3"
    assert all(p.is_dir() for p in (first, second, third))
