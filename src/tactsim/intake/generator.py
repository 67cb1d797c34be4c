from __future__ import annotations

import random
import uuid
from typing import List, Optional

from ..schemas import Task


def new_task_id() -> str:
    return uuid.uuid4().hex


def generate_tasks(n: int, rng: Optional[random.Random] = None) -> List[Task]:
    """
    Generate `n` tasks with random ids and durations in [1, n).

    Notes:
    - durations collapse to 1 when n <= 2
    - a seeded `rng` makes durations reproducible; ids stay unique per call
    """
    if n < 0:
        raise ValueError("task count must be >= 0")
    rng = rng or random.Random()
    upper = max(1, n - 1)
    return [Task(id=new_task_id(), tacts=rng.randint(1, upper)) for _ in range(n)]
