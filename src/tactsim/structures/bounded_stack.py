from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from ..errors import CapacityExceeded, Underflow

T = TypeVar("T")


class BoundedStack(Generic[T]):
    """
    Fixed-capacity LIFO container backed by a preallocated slot array.

    `push` on a full stack raises CapacityExceeded, `pop` on an empty one
    raises Underflow. Capacity is set once at construction.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity = capacity
        self._slots: List[Optional[T]] = [None] * capacity
        self._top = -1  # index of the top element, -1 when empty

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._top + 1

    def is_empty(self) -> bool:
        return self._top < 0

    def can_add(self) -> bool:
        return self._top + 1 < self._capacity

    def push(self, item: T) -> None:
        if self._top + 1 >= self._capacity:
            raise CapacityExceeded("Stack is full")
        self._top += 1
        self._slots[self._top] = item

    def pop(self) -> T:
        if self._top < 0:
            raise Underflow("Stack is empty")
        item = self._slots[self._top]
        self._slots[self._top] = None
        self._top -= 1
        return item  # type: ignore[return-value]

    def items(self) -> List[T]:
        """Top-to-bottom snapshot."""
        return [self._slots[i] for i in range(self._top, -1, -1)]  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"BoundedStack(capacity={self._capacity}, size={len(self)})"
