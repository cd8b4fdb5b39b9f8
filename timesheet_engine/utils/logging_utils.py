"""Structured logging helpers.

Context fields bound with LogContext (a date, a report kind, a request
token) are attached to every record emitted on the same thread, so a
JSON log line can be traced back to the edit or report that caused it.
"""

import functools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, Optional

REDACTED = "***REDACTED***"

# Compared case-insensitively against dictionary keys
SENSITIVE_FIELDS = frozenset(
    {"api_key", "key", "token", "secret", "password", "authorization"}
)

_local = threading.local()


def _current() -> Dict[str, Any]:
    return getattr(_local, "fields", {})


def generate_correlation_id() -> str:
    """Random identifier for a report request (UUID4 text)."""
    return str(uuid.uuid4())


def get_log_context() -> Dict[str, Any]:
    """Fields bound on this thread, as a copy."""
    return dict(_current())


class LogContext:
    """
    Bind structured fields to log records for the duration of a block.

    Blocks nest; leaving one restores the fields that were bound before
    it, even when the block raises.

    Example:
        with LogContext(date="2024-06-10"):
            logger.info("Recalculated day")   # record.date == "2024-06-10"
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._saved: Optional[Dict[str, Any]] = None

    def __enter__(self) -> "LogContext":
        self._saved = _current()
        _local.fields = {**self._saved, **self.fields}
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _local.fields = self._saved if self._saved is not None else {}


class _ContextFilter(logging.Filter):
    """Copies the thread's LogContext fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name, value in _current().items():
            setattr(record, name, value)
        return True


def sanitize_sensitive_data(data: Any) -> Any:
    """
    Copy of ``data`` with credential-like values masked.

    Nested dictionaries are masked too; non-dict input is returned as is
    and ``None`` values stay ``None``.

    Example:
        >>> sanitize_sensitive_data({"api_key": "abc", "model": "m"})
        {'api_key': '***REDACTED***', 'model': 'm'}
    """
    if not isinstance(data, dict):
        return data

    def mask(key: str, value: Any) -> Any:
        if str(key).lower() in SENSITIVE_FIELDS:
            return None if value is None else REDACTED
        return sanitize_sensitive_data(value)

    return {key: mask(key, value) for key, value in data.items()}


def log_function_call(
    func: Optional[Callable] = None, *, level: str = "DEBUG"
) -> Callable:
    """
    Log entry to, exit from, and exceptions raised by the wrapped function.

    Works bare (``@log_function_call``) or configured
    (``@log_function_call(level="INFO")``). Exceptions are logged at
    ERROR and re-raised.
    """
    numeric_level = logging.getLevelName(level.upper())

    def decorate(f: Callable) -> Callable:
        log = logging.getLogger(f.__module__)

        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            log.log(numeric_level, f"Entering {f.__name__}")
            try:
                result = f(*args, **kwargs)
            except Exception as e:
                log.error(f"Exception in {f.__name__}: {type(e).__name__}: {e}")
                raise
            log.log(numeric_level, f"Exiting {f.__name__}")
            return result

        return wrapper

    return decorate if func is None else decorate(func)
