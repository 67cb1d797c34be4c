from __future__ import annotations


class TactSimError(Exception):
    """Base class for board errors."""


class CapacityExceeded(TactSimError):
    """push/enqueue on a full container. Recoverable under backpressure."""


class Underflow(TactSimError):
    """pop/dequeue on an empty container. Indicates a scheduling defect."""


class ProtocolViolation(TactSimError, AssertionError):
    """A processor was handed work while still holding an incomplete task."""
