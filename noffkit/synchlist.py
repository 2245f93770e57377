"""A list whose readers wait for items, with one accessor at a time."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Generic, TypeVar

from .synch import Condition, Lock

__all__ = ["SynchList"]

T = TypeVar("T")


class SynchList(Generic[T]):
    """A FIFO list guarded by a monitor.

    ``remove_front`` waits until an item is available; ``append`` wakes a
    waiting reader.
    """

    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._lock = Lock("list lock")
        self._list_empty = Condition("list empty cond")

    def append(self, item: T) -> None:
        """Add ``item`` at the end and wake a waiting reader."""
        with self._lock:
            self._items.append(item)
            self._list_empty.signal(self._lock)

    def remove_front(self) -> T:
        """Remove and return the first item, waiting while the list is empty."""
        with self._lock:
            while not self._items:
                self._list_empty.wait(self._lock)
            return self._items.popleft()

    def apply(self, func: Callable[[T], object]) -> None:
        """Call ``func`` on every item in order, holding the list's lock."""
        with self._lock:
            for item in self._items:
                func(item)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)