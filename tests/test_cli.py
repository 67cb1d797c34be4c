import json

from typer.testing import CliRunner

from tactsim.cli import app

runner = CliRunner()


def test_cli_runs_given_tasks(tmp_path):
    result = runner.invoke(app, [
        "-t", "A:1", "-t", "B:1",
        "--stack-capacity", "1", "--queue-capacity", "1",
        "--runs-dir", str(tmp_path / "runs"),
    ])
    assert result.exit_code == 0, result.output
    assert "Tact 6" in result.output
    assert "Task finished: Task(id=A, tacts=1)" in result.output
    assert "Task finished: Task(id=B, tacts=1)" in result.output
    assert "Work complete" in result.output
    assert len(list((tmp_path / "runs").iterdir())) == 1


def test_cli_generates_tasks(tmp_path):
    result = runner.invoke(app, ["-g", "4", "--seed", "1", "--no-artifacts"])
    assert result.exit_code == 0, result.output
    assert "Work complete" in result.output
    assert result.output.count("Task finished:") == 4


def test_cli_reads_tasks_file(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([{"id": "X", "tacts": 2}]), encoding="utf-8")
    result = runner.invoke(app, ["--tasks-file", str(path), "--no-artifacts"])
    assert result.exit_code == 0, result.output
    assert "Task finished: Task(id=X, tacts=2)" in result.output


def test_cli_stall_exits_nonzero():
    result = runner.invoke(app, [
        "-t", "A:1", "--stack-capacity", "0", "--max-tacts", "5", "--no-artifacts",
    ])
    assert result.exit_code == 1
    assert "Error adding to stack: Stack is full" in result.output
    assert "Stopped after 5 tacts" in result.output


def test_cli_rejects_bad_task():
    result = runner.invoke(app, ["-t", "A:zero", "--no-artifacts"])
    assert result.exit_code == 2


def test_cli_interactive_manual_entry():
    answers = "\n".join([
        "3",    # invalid menu choice, asked again
        "2",    # enter tasks by hand
        "2",    # two tasks
        "A", "1",
        "B", "0", "1",  # zero tacts is asked again
        "1",    # stack capacity
        "1",    # queue capacity
        "0",    # no step mode
    ]) + "\n"
    result = runner.invoke(app, ["--no-artifacts"], input=answers)
    assert result.exit_code == 0, result.output
    assert "Task finished: Task(id=A, tacts=1)" in result.output
    assert "Task finished: Task(id=B, tacts=1)" in result.output
    assert "Work complete" in result.output


def test_cli_interactive_generate_with_defaults_and_step_mode():
    # capacities take the default (task count); step mode pauses are skipped off a tty
    answers = "1\n3\n\n\n1\n"
    result = runner.invoke(app, ["--no-artifacts", "--seed", "5"], input=answers)
    assert result.exit_code == 0, result.output
    assert result.output.count("Task finished:") == 3


def test_read_choice_returns_mapped_value(monkeypatch):
    from tactsim import interactive

    answers = iter(["x", " b "])
    monkeypatch.setattr(interactive.typer, "prompt", lambda *a, **k: next(answers))
    assert interactive.read_choice("pick", {"a": 1, "b": 2}) == 2
