"""Bounded, expiring cache of recently seen task IDs."""

from __future__ import annotations

import threading
import time
from collections import deque


class TaskCache:
    """Thread-safe queue of the most recent task IDs.

    Entries older than ``expiration`` seconds are dropped. When the cache is
    full, inserting a new ID evicts the oldest one.
    """

    def __init__(self, capacity: int, expiration: float) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        if expiration < 0:
            raise ValueError("expiration must not be negative")
        self.capacity = capacity
        self.expiration = expiration
        self._entries: deque[tuple[str, float]] = deque()
        self._lock = threading.Lock()

    def _prune_expired(self) -> None:
        now = time.monotonic()
        self._entries = deque(
            (task_id, stamp)
            for task_id, stamp in self._entries
            if now - stamp < self.expiration
        )

    def _holds(self, task_id: str) -> bool:
        return any(existing == task_id for existing, _ in self._entries)

    def contains(self, task_id: str) -> bool:
        """Return True if the task ID was seen recently."""
        with self._lock:
            self._prune_expired()
            return self._holds(task_id)

    def insert(self, task_id: str) -> None:
        """Record a task ID, evicting the oldest entry if the cache is full."""
        with self._lock:
            self._prune_expired()
            if self._holds(task_id):
                return
            if len(self._entries) == self.capacity and self._entries:
                self._entries.popleft()
            self._entries.append((task_id, time.monotonic()))

    def __contains__(self, task_id: object) -> bool:
        return isinstance(task_id, str) and self.contains(task_id)

    def __len__(self) -> int:
        with self._lock:
            self._prune_expired()
            return len(self._entries)