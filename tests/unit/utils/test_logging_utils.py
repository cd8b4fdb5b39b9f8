"""Unit tests for structured logging utilities."""

import logging
import threading

import pytest

from timesheet_engine.utils.logging_utils import (
    LogContext,
    _ContextFilter,
    generate_correlation_id,
    get_log_context,
    log_function_call,
    sanitize_sensitive_data,
)


class TestCorrelationId:
    def test_ids_are_unique_strings(self):
        ids = {generate_correlation_id() for _ in range(20)}
        assert len(ids) == 20
        assert all(isinstance(value, str) and len(value) == 36 for value in ids)


class TestLogContext:
    """Test thread-local context fields."""

    def test_fields_bound_inside_block(self):
        with LogContext(date="2024-06-10"):
            assert get_log_context()["date"] == "2024-06-10"
        assert "date" not in get_log_context()

    def test_nested_contexts_restore_outer(self):
        with LogContext(date="2024-06-10", report_kind="daily"):
            with LogContext(date="2024-06-11"):
                assert get_log_context() == {
                    "date": "2024-06-11",
                    "report_kind": "daily",
                }
            assert get_log_context()["date"] == "2024-06-10"

    def test_context_restored_on_exception(self):
        with pytest.raises(RuntimeError):
            with LogContext(date="2024-06-10"):
                raise RuntimeError("boom")
        assert get_log_context() == {}

    def test_context_is_per_thread(self):
        seen = {}

        def worker():
            seen["context"] = get_log_context()

        with LogContext(date="2024-06-10"):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()
        assert seen["context"] == {}

    def test_filter_copies_fields_to_record(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        with LogContext(correlation_id="abc"):
            assert _ContextFilter().filter(record)
        assert record.correlation_id == "abc"


class TestSanitizeSensitiveData:
    """Test redaction before logging."""

    def test_redacts_known_keys(self):
        data = {"api_key": "secret", "endpoint": "https://x", "Authorization": "Bearer t"}
        sanitized = sanitize_sensitive_data(data)
        assert sanitized["api_key"] == "***REDACTED***"
        assert sanitized["Authorization"] == "***REDACTED***"
        assert sanitized["endpoint"] == "https://x"
        assert data["api_key"] == "secret"

    def test_nested_dicts(self):
        sanitized = sanitize_sensitive_data({"params": {"key": "secret", "alt": "json"}})
        assert sanitized == {"params": {"key": "***REDACTED***", "alt": "json"}}

    def test_none_stays_none(self):
        assert sanitize_sensitive_data({"api_key": None}) == {"api_key": None}

    def test_non_dict_passthrough(self):
        assert sanitize_sensitive_data("plain") == "plain"


class TestLogFunctionCall:
    """Test the entry/exit logging decorator."""

    def test_logs_entry_and_exit(self, caplog):
        @log_function_call
        def add(a, b):
            return a + b

        with caplog.at_level(logging.DEBUG):
            assert add(1, 2) == 3
        assert "Entering add" in caplog.text
        assert "Exiting add" in caplog.text

    def test_custom_level(self, caplog):
        @log_function_call(level="INFO")
        def noop():
            return None

        with caplog.at_level(logging.INFO):
            noop()
        assert any(r.levelno == logging.INFO for r in caplog.records)

    def test_logs_and_reraises_exceptions(self, caplog):
        @log_function_call
        def fail():
            raise ValueError("bad input")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError):
                fail()
        assert "Exception in fail: ValueError: bad input" in caplog.text

    def test_preserves_metadata(self):
        @log_function_call
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
