from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from ..errors import CapacityExceeded, Underflow

T = TypeVar("T")


class BoundedQueue(Generic[T]):
    """
    Fixed-capacity circular FIFO.

    Head index plus live count; the queue is full iff count == capacity, so
    all `capacity` slots hold live elements (no sentinel slot). Indices are
    only computed modulo capacity when capacity > 0.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity = capacity
        self._slots: List[Optional[T]] = [None] * capacity
        self._head = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def can_add(self) -> bool:
        return self._size < self._capacity

    def enqueue(self, item: T) -> None:
        if self._size >= self._capacity:
            raise CapacityExceeded("Queue is full")
        tail = (self._head + self._size) % self._capacity
        self._slots[tail] = item
        self._size += 1

    def dequeue(self) -> T:
        if self._size == 0:
            raise Underflow("Queue is empty")
        item = self._slots[self._head]
        self._slots[self._head] = None
        self._head = (self._head + 1) % self._capacity
        self._size -= 1
        return item  # type: ignore[return-value]

    def items(self) -> List[T]:
        """FIFO snapshot, next to dequeue first."""
        return [
            self._slots[(self._head + i) % self._capacity]  # type: ignore[misc]
            for i in range(self._size)
        ]

    def __repr__(self) -> str:
        return f"BoundedQueue(capacity={self._capacity}, size={self._size})"
