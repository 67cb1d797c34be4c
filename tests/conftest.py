import sys
from pathlib import Path

# Ensure package import for tests
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest

from tactsim.config import SimConfig
from tactsim.schemas import Task


@pytest.fixture
def cfg(tmp_path) -> SimConfig:
    """Config isolated from the environment, writing runs under tmp_path."""

    return SimConfig(
        runs_dir=str(tmp_path / "runs"),
        stack_capacity=None,
        queue_capacity=None,
        step_mode=False,
        max_tacts=1000,
        seed=None,
        check_invariants=True,
        write_artifacts=True,
        log_level="WARNING",
    )


@pytest.fixture
def make_tasks():
    """Build tasks from (id, tacts) pairs or "id:tacts" shorthand."""

    def _make(*specs):
        tasks = []
        for spec in specs:
            if isinstance(spec, str):
                task_id, tacts = spec.split(":")
                spec = (task_id, int(tacts))
            tasks.append(Task(id=spec[0], tacts=spec[1]))
        return tasks

    return _make
