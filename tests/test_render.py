from tactsim.scheduler import Scheduler
from tactsim.schemas import ProcessorStatus, TactEvent, TactReport, Task
from tactsim.utils.render import render_processor, render_report


def test_render_processor_lines():
    task = Task(id="A", tacts=3)
    assert render_processor(ProcessorStatus(name="P1")) == "Processor P1 is idle"
    assert (
        render_processor(ProcessorStatus(name="P1", state="running", task=task, elapsed=1))
        == "Processor P1 is running Task(id=A, tacts=3) 1/3"
    )
    assert (
        render_processor(ProcessorStatus(name="P2", state="completed", task=task, elapsed=3))
        == "Processor P2 completed Task(id=A, tacts=3) 3/3"
    )


def test_render_report_layout():
    a, b, c = Task(id="A", tacts=1), Task(id="B", tacts=2), Task(id="C", tacts=1)
    report = TactReport(
        tact=4,
        backlog=[c],
        stack=[b, a],
        queue=[],
        processors=[ProcessorStatus(name="P1"), ProcessorStatus(name="P2")],
        events=[
            TactEvent(tact=4, kind="stack_full", source="backlog", task=c, message="Stack is full"),
            TactEvent(tact=4, kind="finished", source="P2", task=a),
        ],
    )
    assert render_report(report) == [
        "Tact 4",
        "[Task(id=C, tacts=1)]",
        "Stack[Task(id=B, tacts=2), Task(id=A, tacts=1)]",
        "Processor P1 is idle",
        "Queue[]",
        "Processor P2 is idle",
        "Error adding to stack: Stack is full",
        "Task finished: Task(id=A, tacts=1)",
    ]


def test_render_queue_error_from_live_board(make_tasks):
    sched = Scheduler(stack_capacity=1, queue_capacity=0)
    sched.submit(make_tasks("A:1"))
    for _ in range(3):
        report = sched.step()
    assert "Error adding to queue: Queue is full" in render_report(report)
