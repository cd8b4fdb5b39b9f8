"""
Unit tests for the summarization service client.
"""

import logging
from unittest.mock import Mock

import pytest
import requests

from timesheet_engine.models.summary import SummaryRequest
from timesheet_engine.services.errors import ReportError, SummaryGenerationError
from timesheet_engine.services.retry_handler import RetryHandler
from timesheet_engine.services.summary_service import (
    SummaryService,
    extract_summary_text,
)

ENDPOINT = "https://api.test/v1beta/models/test-model:generateContent"


def ok_response(payload):
    response = Mock(spec=requests.Response)
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def error_response(status_code):
    response = requests.Response()
    response.status_code = status_code
    failing = Mock(spec=requests.Response)
    failing.raise_for_status.side_effect = requests.HTTPError(
        f"HTTP {status_code}", response=response
    )
    return failing


def candidate(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def request_payload():
    return SummaryRequest(
        kind="weekly",
        employee_name="Jane Doe",
        start_date="2024-06-10",
        end_date="2024-06-16",
        prompt="Generate a weekly summary",
    )


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def service(session):
    return SummaryService(
        api_key="secret-key",
        endpoint=ENDPOINT,
        timeout=5,
        retry_handler=RetryHandler(max_retries=2, sleep=Mock()),
        session=session,
    )


class TestExtractSummaryText:
    """Test response parsing."""

    def test_valid_response(self):
        assert extract_summary_text(candidate("Hello")) == "Hello"

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            {},
            {"candidates": []},
            {"candidates": [{}]},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": None}]}}]},
            candidate(""),
            candidate("   "),
        ],
    )
    def test_malformed_or_empty(self, payload):
        assert extract_summary_text(payload) is None


class TestSummaryService:
    """Test cases for SummaryService."""

    def test_posts_prompt_payload(self, service, session, request_payload):
        session.post.return_value = ok_response(candidate("Weekly text"))

        assert service.summarize(request_payload) == "Weekly text"

        session.post.assert_called_once_with(
            ENDPOINT,
            params={"key": "secret-key"},
            json={
                "contents": [
                    {"role": "user", "parts": [{"text": "Generate a weekly summary"}]}
                ]
            },
            timeout=5,
        )

    def test_missing_key(self, session, request_payload):
        service = SummaryService(api_key=None, endpoint=ENDPOINT, session=session)
        assert not service.is_configured
        with pytest.raises(SummaryGenerationError, match="API key is not configured"):
            service.summarize(request_payload)
        session.post.assert_not_called()

    def test_empty_content(self, service, session, request_payload):
        session.post.return_value = ok_response(candidate(""))
        with pytest.raises(SummaryGenerationError) as exc_info:
            service.summarize(request_payload)
        assert exc_info.value.message == (
            "Failed to generate weekly report. Unexpected API response structure "
            "or empty content."
        )

    def test_transient_failure_is_retried(self, service, session, request_payload):
        session.post.side_effect = [
            error_response(503),
            ok_response(candidate("Recovered")),
        ]
        assert service.summarize(request_payload) == "Recovered"
        assert session.post.call_count == 2

    def test_retries_exhausted(self, service, session, request_payload):
        session.post.return_value = error_response(429)
        with pytest.raises(SummaryGenerationError, match="Error generating weekly report"):
            service.summarize(request_payload)
        assert session.post.call_count == 3

    def test_client_error_not_retried(self, service, session, request_payload):
        session.post.return_value = error_response(400)
        with pytest.raises(SummaryGenerationError) as exc_info:
            service.summarize(request_payload)
        assert session.post.call_count == 1
        assert isinstance(exc_info.value, ReportError)

    def test_invalid_json(self, service, session, request_payload):
        response = ok_response(None)
        response.json.side_effect = ValueError("Expecting value")
        session.post.return_value = response
        with pytest.raises(SummaryGenerationError, match="Expecting value"):
            service.summarize(request_payload)

    def test_api_key_not_logged(self, service, session, request_payload, caplog):
        session.post.return_value = ok_response(candidate("text"))
        with caplog.at_level(logging.DEBUG):
            service.summarize(request_payload)
        assert "secret-key" not in caplog.text

    def test_from_settings(self, test_config):
        service = SummaryService.from_settings(test_config)
        assert service.api_key == "test-api-key"
        assert service.endpoint.endswith("/models/test-model:generateContent")
        assert service.retry_handler.max_retries == 0
