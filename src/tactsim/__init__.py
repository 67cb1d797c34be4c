"""
tactsim package.

Two-stage tact scheduler:
- backlog -> bounded LIFO stack -> processor P1
- P1 -> bounded circular FIFO queue -> processor P2 -> finished
- one fixed, documented operation order per tact
- structured event logs (JSONL) with tact attribution
"""

__version__ = "0.1.0"
