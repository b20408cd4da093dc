"""Single-flight guard collapsing concurrent calls that share a key."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


class SingleFlight:
    """Run at most one call per key; later callers wait for it to finish.

    Waiting callers do not receive the leader's return value. ``run`` returns
    ``(True, value)`` for the leader and ``(False, None)`` for joiners.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._inflight: dict[str, threading.Event] = {}

    def run(self, key: str, fn: Callable[[], T]) -> tuple[bool, T | None]:
        with self._lock:
            done = self._inflight.get(key)
            leader = done is None
            if leader:
                done = threading.Event()
                self._inflight[key] = done

        if not leader:
            done.wait()
            return False, None

        try:
            return True, fn()
        finally:
            with self._lock:
                self._inflight.pop(key, None)
            done.set()

    def in_flight(self, key: str) -> bool:
        with self._lock:
            return key in self._inflight
