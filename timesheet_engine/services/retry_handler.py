"""
Backoff and retry for calls to the summarization endpoint.

Only transient HTTP failures (rate limiting, server errors, dropped
connections, timeouts) are retried; a bad request or a rejected API key
fails on the first attempt.
"""

import logging
import random
import threading
import time
from typing import Any, Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429})


class RetryExhaustedException(Exception):
    """Every allowed attempt failed with a retryable error."""

    def __init__(self, message: str, last_exception: Optional[Exception] = None):
        super().__init__(message)
        self.last_exception = last_exception


def is_transient_error(exception: Exception) -> bool:
    """Tell whether a failed summarization request may succeed if repeated.

    Example:
        >>> is_transient_error(requests.Timeout("slow"))
        True
        >>> is_transient_error(ValueError("bad json"))
        False
    """
    if isinstance(exception, (requests.ConnectionError, requests.Timeout)):
        return True
    if not isinstance(exception, requests.HTTPError) or exception.response is None:
        return False
    status = exception.response.status_code
    return status in RETRYABLE_STATUS_CODES or status >= 500


class RetryHandler:
    """
    Runs a callable, backing off exponentially between failed attempts.

    The delay before retry ``n`` (0-based) is
    ``min(base_delay * exponential_base ** n, max_delay)`` with up to
    ``jitter_factor`` of random spread either way. Counters are shared
    across threads.

    Example:
        handler = RetryHandler(max_retries=2, base_delay=0.5)
        response = handler.execute_with_retry(session.post, url, json=payload)
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2,
        jitter_factor: float = 0.1,
        retry_condition: Optional[Callable[[Exception], bool]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            max_retries: Attempts allowed after the first one
            base_delay: Delay before the first retry (seconds)
            max_delay: Upper bound for any single delay (seconds)
            exponential_base: Growth factor between consecutive delays
            jitter_factor: Relative random spread applied to each delay
            retry_condition: Predicate selecting retryable exceptions;
                defaults to is_transient_error
            sleep: Waiting function, replaceable in tests
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter_factor = jitter_factor
        self.retry_condition = retry_condition or is_transient_error
        self._sleep = sleep

        self._lock = threading.Lock()
        self._stats: Dict[str, int] = {}
        self.reset_statistics()

    def calculate_delay(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (0-based)."""
        delay = min(self.base_delay * self.exponential_base**attempt, self.max_delay)
        spread = delay * self.jitter_factor
        return max(0.0, delay + random.uniform(-spread, spread))

    def execute_with_retry(self, func: Callable, *args, **kwargs) -> Any:
        """
        Call ``func(*args, **kwargs)`` until it succeeds or retries run out.

        Raises:
            RetryExhaustedException: The last allowed attempt failed with a
                retryable error (chained to that error)
            Exception: The first non-retryable error, unchanged
        """
        name = getattr(func, "__name__", repr(func))
        self._count(total_calls=1)

        for attempt in range(self.max_retries + 1):
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if not self.retry_condition(e):
                    logger.debug(f"{name} failed with non-retryable {type(e).__name__}")
                    raise
                last_error = e
            else:
                if attempt:
                    logger.info(f"{name} succeeded on retry {attempt}")
                self._count(total_retries=attempt)
                return result

            if attempt < self.max_retries:
                delay = self.calculate_delay(attempt)
                logger.debug(
                    f"{name} attempt {attempt + 1}/{self.max_retries + 1} failed "
                    f"({type(last_error).__name__}: {last_error}); "
                    f"waiting {delay:.2f}s"
                )
                self._sleep(delay)

        self._count(total_retries=self.max_retries, total_failures=1)
        logger.warning(f"{name} still failing after {self.max_retries} retries")
        raise RetryExhaustedException(
            f"Gave up after {self.max_retries} retries. "
            f"Last error: {type(last_error).__name__}: {last_error}",
            last_exception=last_error,
        ) from last_error

    def _count(self, **increments: int) -> None:
        with self._lock:
            for key, amount in increments.items():
                self._stats[key] += amount

    def get_retry_statistics(self) -> Dict[str, int]:
        """Snapshot of call, retry and failure counters."""
        with self._lock:
            return dict(self._stats)

    def reset_statistics(self) -> None:
        with self._lock:
            self._stats = {"total_calls": 0, "total_retries": 0, "total_failures": 0}
