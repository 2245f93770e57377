"""Thread control records and a first-in, first-out ready list."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Deque, Iterator, Optional

__all__ = ["ThreadStatus", "ThreadRecord", "Scheduler"]


class ThreadStatus(Enum):
    """Life-cycle states of a thread."""

    JUST_CREATED = auto()
    RUNNING = auto()
    READY = auto()
    BLOCKED = auto()
    ZOMBIE = auto()


@dataclass(eq=False)
class ThreadRecord:
    """What the scheduler knows about one thread.

    ``space`` is the address space of the user program the thread runs,
    or ``None`` for a thread that only runs kernel code.
    """

    name: str
    thread_id: int = 0
    status: ThreadStatus = ThreadStatus.JUST_CREATED
    space: Optional[Any] = None

    def __str__(self) -> str:
        return self.name


class Scheduler:
    """Chooses the next thread to run: no priorities, straight FIFO."""

    def __init__(self, current: Optional[ThreadRecord] = None) -> None:
        self._ready: Deque[ThreadRecord] = deque()
        self._to_be_destroyed: Optional[ThreadRecord] = None
        self.current = current
        if current is not None:
            current.status = ThreadStatus.RUNNING

    def __len__(self) -> int:
        return len(self._ready)

    def __iter__(self) -> Iterator[ThreadRecord]:
        return iter(tuple(self._ready))

    def ready_to_run(self, thread: ThreadRecord) -> None:
        """Mark ``thread`` ready and put it at the end of the ready list."""
        thread.status = ThreadStatus.READY
        self._ready.append(thread)

    def find_next_to_run(self) -> Optional[ThreadRecord]:
        """Remove and return the first ready thread, or ``None`` if none is ready."""
        if not self._ready:
            return None
        return self._ready.popleft()

    def run(
        self, next_thread: ThreadRecord, finishing: bool = False
    ) -> Optional[ThreadRecord]:
        """Dispatch the CPU to ``next_thread``.

        When ``finishing`` is set the previously running thread is done;
        it is disposed of once the switch has happened and is returned.
        """
        old = self.current
        if finishing:
            if old is None:
                raise RuntimeError("no running thread to finish")
            self._to_be_destroyed = old
        self.current = next_thread
        next_thread.status = ThreadStatus.RUNNING
        return self.check_to_be_destroyed()

    def check_to_be_destroyed(self) -> Optional[ThreadRecord]:
        """Dispose of a thread that finished before the last switch, if any."""
        finished = self._to_be_destroyed
        if finished is not None:
            finished.status = ThreadStatus.ZOMBIE
            self._to_be_destroyed = None
        return finished

    def describe(self) -> str:
        """The contents of the ready list, as printed for debugging."""
        return "Ready list contents:\n" + "".join(str(t) for t in self._ready)