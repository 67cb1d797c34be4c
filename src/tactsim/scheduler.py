"""
Two-stage tact scheduler.

backlog -> stack (LIFO) -> P1 -> queue (FIFO) -> P2 -> finished

Every tact runs these steps in exactly this order:

  1. P2 idle and queue non-empty      -> dequeue into P2
  2. P1 idle and stack non-empty      -> pop into P1
  3. P2 complete                      -> release, task finished
  4. P1 complete                      -> release into queue;
                                         queue full: P1 keeps the task
  5. backlog non-empty                -> push head onto stack;
                                         stack full: head goes back first
  6. advance P1 and P2 by one tact
  7. Done iff every container is empty and both processors are idle

Pickups (1, 2) run before hand-offs (3, 4) and backlog intake (5), so a
slot freed in this tact is refilled by the upstream stage but not drained
by the downstream one until the next tact. A task popped in step 2 can
never be pushed back within the same tact.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional

from .errors import CapacityExceeded
from .logger import EventLogger
from .processor import Processor
from .schemas import TactEvent, TactReport, Task
from .structures.bounded_queue import BoundedQueue
from .structures.bounded_stack import BoundedStack

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Owns the backlog, both buffers and both processors for a whole run.

    Usage:
        sched = Scheduler(stack_capacity=2, queue_capacity=2)
        sched.submit(tasks)
        while not sched.is_done():
            report = sched.step()
    """

    def __init__(
        self,
        stack_capacity: int,
        queue_capacity: int,
        event_logger: Optional[EventLogger] = None,
    ):
        self.stack: BoundedStack[Task] = BoundedStack(stack_capacity)
        self.queue: BoundedQueue[Task] = BoundedQueue(queue_capacity)
        self.p1 = Processor("P1")
        self.p2 = Processor("P2")
        self.backlog: Deque[Task] = deque()
        self.event_logger = event_logger

        self.tact = 0
        self.submitted = 0
        self.completed: List[Task] = []

    # ------------------------------------------------------------
    def submit(self, tasks: Iterable[Task]) -> None:
        """Append tasks to the backlog tail, in order."""
        added = 0
        for task in tasks:
            self.backlog.append(task)
            added += 1
        self.submitted += added
        logger.debug(f"Submitted {added} tasks (backlog={len(self.backlog)})")

    def is_done(self) -> bool:
        return not (
            self.backlog
            or not self.stack.is_empty()
            or self.p1.is_busy()
            or not self.queue.is_empty()
            or self.p2.is_busy()
        )

    # ------------------------------------------------------------
    def step(self) -> TactReport:
        """Run exactly one tact and return the resulting board."""
        tact = self.tact
        self.tact += 1
        events: List[TactEvent] = []
        finished: List[Task] = []

        # 1. P2 pickup
        if not self.p2.is_busy() and not self.queue.is_empty():
            task = self.queue.dequeue()
            self.p2.assign(task)
            events.append(TactEvent(tact=tact, kind="assigned", source=self.p2.name, task=task))

        # 2. P1 pickup
        if not self.p1.is_busy() and not self.stack.is_empty():
            task = self.stack.pop()
            self.p1.assign(task)
            events.append(TactEvent(tact=tact, kind="assigned", source=self.p1.name, task=task))

        # 3. P2 hand-off (leaves the system)
        if self.p2.is_complete():
            task = self.p2.release()
            self.completed.append(task)
            finished.append(task)
            events.append(TactEvent(tact=tact, kind="finished", source=self.p2.name, task=task))

        # 4. P1 hand-off into the queue
        if self.p1.is_complete():
            task = self.p1.task
            try:
                self.queue.enqueue(task)
            except CapacityExceeded as e:
                logger.info(f"[tact {tact}] {self.p1.name} holds {task}: {e}")
                events.append(TactEvent(
                    tact=tact, kind="queue_full", source=self.p1.name, task=task, message=str(e),
                ))
            else:
                self.p1.release()
                events.append(TactEvent(tact=tact, kind="enqueued", source=self.p1.name, task=task))

        # 5. backlog intake
        if self.backlog:
            task = self.backlog.popleft()
            try:
                self.stack.push(task)
            except CapacityExceeded as e:
                self.backlog.appendleft(task)
                logger.info(f"[tact {tact}] {task} stays in backlog: {e}")
                events.append(TactEvent(
                    tact=tact, kind="stack_full", source="backlog", task=task, message=str(e),
                ))
            else:
                events.append(TactEvent(tact=tact, kind="pushed", source="backlog", task=task))

        # 6. advance
        events.append(self.p1.advance_tact(tact))
        events.append(self.p2.advance_tact(tact))

        # 7. termination
        report = self.snapshot(tact, events=events, finished=finished)

        if self.event_logger is not None:
            for ev in events:
                self.event_logger.log(
                    ev.source,
                    ev.kind,
                    ev.model_dump(exclude={"tact", "kind", "source"}, exclude_none=True),
                    tact=tact,
                )

        return report

    def snapshot(
        self,
        tact: int,
        events: Optional[List[TactEvent]] = None,
        finished: Optional[List[Task]] = None,
    ) -> TactReport:
        return TactReport(
            tact=tact,
            backlog=list(self.backlog),
            stack=self.stack.items(),
            queue=self.queue.items(),
            processors=[self.p1.status(), self.p2.status()],
            events=events or [],
            finished=finished or [],
            completed_count=len(self.completed),
            done=self.is_done(),
        )


def new_scheduler(
    stack_capacity: int,
    queue_capacity: int,
    event_logger: Optional[EventLogger] = None,
) -> Scheduler:
    return Scheduler(stack_capacity, queue_capacity, event_logger=event_logger)
