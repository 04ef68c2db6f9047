"""
Retry policy for catalog requests.

Attempts are numbered from zero. Attempt ``n > 0`` waits ``n**2`` times the
base delay first, so the default schedule is 0.1s, 0.4s, 0.9s, ...
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Iterator, Optional

DEFAULT_BASE_DELAY_SECONDS = 0.1


class RetryPolicy:
    """Quadratic backoff schedule with an injectable sleep function.

    The policy keeps no per-call state; :meth:`attempts` yields a fresh
    sequence each time it is called, so one instance can be shared by
    concurrent callers.
    """

    def __init__(
        self,
        max_retries: int,
        *,
        base_delay_seconds: float = DEFAULT_BASE_DELAY_SECONDS,
        sleep_fn: Optional[Callable[[float], None]] = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative.")
        if base_delay_seconds < 0:
            raise ValueError("base_delay_seconds cannot be negative.")

        self._max_retries = max_retries
        self._base_delay_seconds = float(base_delay_seconds)
        self._sleep_fn = sleep_fn or time.sleep

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def max_attempts(self) -> int:
        return self._max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Return the wait before ``attempt`` (zero for the first one)."""
        if attempt <= 0:
            return 0.0
        return attempt * attempt * self._base_delay_seconds

    def attempts(self) -> Iterator[int]:
        """Yield attempt numbers, sleeping before every retry.

        The sleep is not interrupted by caller deadlines.
        """
        for attempt in range(self.max_attempts):
            delay = self.delay_for(attempt)
            if delay > 0:
                self._sleep_fn(delay)
            yield attempt
