"""Semaphores, locks and Mesa-style condition variables."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Optional

__all__ = ["Semaphore", "Lock", "Condition"]


class Semaphore:
    """A counting semaphore whose value never drops below zero.

    ``p`` waits until the value is positive and then decrements it;
    ``v`` increments it and wakes one waiter, if any.
    """

    def __init__(self, name: str = "semaphore", initial_value: int = 0) -> None:
        if initial_value < 0:
            raise ValueError(f"initial value must not be negative, got {initial_value}")
        self.name = name
        self._value = initial_value
        self._guard = threading.Condition(threading.Lock())

    def __repr__(self) -> str:
        return f"Semaphore({self.name!r})"

    def p(self) -> None:
        """Wait until the value is positive, then decrement it."""
        with self._guard:
            while self._value == 0:
                self._guard.wait()
            self._value -= 1

    def v(self) -> None:
        """Increment the value, waking a waiting thread if there is one."""
        with self._guard:
            self._value += 1
            self._guard.notify()


class Lock:
    """A mutual-exclusion lock that only its holder may release.

    Usable as a context manager.
    """

    def __init__(self, name: str = "lock") -> None:
        self.name = name
        self._semaphore = Semaphore("lock", 1)
        self._holder: Optional[int] = None

    def __repr__(self) -> str:
        return f"Lock({self.name!r})"

    def acquire(self) -> None:
        """Wait until the lock is free, then take it."""
        self._semaphore.p()
        self._holder = threading.get_ident()

    def release(self) -> None:
        """Free the lock; raises RuntimeError unless the caller holds it."""
        if not self.is_held_by_current_thread():
            raise RuntimeError(f"lock {self.name!r} is not held by the current thread")
        self._holder = None
        self._semaphore.v()

    def is_held_by_current_thread(self) -> bool:
        """Whether the calling thread holds this lock."""
        return self._holder == threading.get_ident()

    def __enter__(self) -> "Lock":
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class Condition:
    """A condition variable with Mesa semantics.

    Every operation must be made while holding the lock that protects the
    condition; a woken waiter re-acquires that lock before ``wait`` returns.
    """

    def __init__(self, name: str = "condition") -> None:
        self.name = name
        self._wait_queue: Deque[Semaphore] = deque()

    def __repr__(self) -> str:
        return f"Condition({self.name!r})"

    @staticmethod
    def _check_held(lock: Lock) -> None:
        if not lock.is_held_by_current_thread():
            raise RuntimeError(f"lock {lock.name!r} is not held by the current thread")

    def wait(self, lock: Lock) -> None:
        """Release ``lock``, sleep until signalled, then re-acquire ``lock``."""
        self._check_held(lock)
        waiter = Semaphore("condition", 0)
        self._wait_queue.append(waiter)
        lock.release()
        waiter.p()
        lock.acquire()

    def signal(self, lock: Lock) -> None:
        """Wake the longest-waiting thread, if any."""
        self._check_held(lock)
        if self._wait_queue:
            self._wait_queue.popleft().v()

    def broadcast(self, lock: Lock) -> None:
        """Wake every waiting thread."""
        while self._wait_queue:
            self.signal(lock)