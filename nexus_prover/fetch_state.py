"""Timing and backoff state for fetching tasks from the orchestrator."""

from __future__ import annotations

import time


class TaskFetchState:
    """Decides when the next task fetch may happen, with backoff after errors.

    All durations are in seconds. ``backoff`` is the base backoff: the state
    starts with it, and error backoff never grows beyond twice it.
    ``fetch_delay`` is added to any retry time the server asks for.
    ``low_water_mark`` is the queue length below which fetching is wanted.
    """

    def __init__(self, backoff: float, fetch_delay: float, low_water_mark: int) -> None:
        if backoff < 0:
            raise ValueError("backoff must not be negative")
        if fetch_delay < 0:
            raise ValueError("fetch_delay must not be negative")
        if low_water_mark < 0:
            raise ValueError("low_water_mark must not be negative")
        self._base_backoff = float(backoff)
        self._fetch_delay = float(fetch_delay)
        self.low_water_mark = low_water_mark
        self._backoff = float(backoff)
        # Pretend the last attempt was long enough ago to allow an immediate first fetch.
        self._last_fetch_time = time.monotonic() - (self._base_backoff + 1.0)

    def can_fetch_now(self) -> bool:
        """True if the backoff has passed since the last fetch attempt."""
        return time.monotonic() - self._last_fetch_time >= self._backoff

    def backoff_duration(self) -> float:
        """The current backoff in seconds."""
        return self._backoff

    def should_fetch(self, tasks_in_queue: int) -> bool:
        """True if the queue is low and the backoff has passed."""
        return tasks_in_queue < self.low_water_mark and self.can_fetch_now()

    def record_fetch_attempt(self) -> None:
        """Note that a fetch was attempted now."""
        self._last_fetch_time = time.monotonic()

    def set_backoff_from_server(self, retry_after_seconds: int) -> None:
        """Wait exactly as long as the server asked, plus the fetch delay."""
        if retry_after_seconds < 0:
            raise ValueError("retry_after_seconds must not be negative")
        self._backoff = float(retry_after_seconds) + self._fetch_delay

    def increase_backoff_for_error(self) -> None:
        """Double the backoff, capped at twice the base backoff."""
        self._backoff = min(self._backoff * 2, self._base_backoff * 2)