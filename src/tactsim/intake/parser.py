from __future__ import annotations

import json
from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from ..schemas import Task
from .generator import new_task_id


_TASK_LIST = TypeAdapter(List[Task])


def parse_task(text: str) -> Task:
    """
    Parse "id:tacts" into a Task.

    An empty id gets a generated one. The duration must be an integer >= 1.
    """
    task_id, sep, tacts = text.strip().rpartition(":")
    if not sep:
        raise ValueError(f"Expected 'id:tacts', got {text!r}")
    try:
        duration = int(tacts)
    except ValueError:
        raise ValueError(f"Task duration must be an integer, got {tacts!r}") from None
    if duration < 1:
        raise ValueError(f"Task duration must be >= 1, got {duration}")
    return Task(id=task_id.strip() or new_task_id(), tacts=duration)


def load_tasks(path: Path) -> List[Task]:
    """
    Load a JSON list of {"id": ..., "tacts": ...} objects.
    """
    with Path(path).open("r", encoding="utf-8") as f:
        data = json.load(f)
    return _TASK_LIST.validate_python(data)
