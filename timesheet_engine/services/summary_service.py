"""
Summarization service client for daily and weekly timesheet reports.
"""

import logging
from typing import Any, Dict, Optional

import requests

from timesheet_engine.config.settings import TimesheetSettings
from timesheet_engine.models.summary import SummaryRequest
from timesheet_engine.services.errors import SummaryGenerationError
from timesheet_engine.services.retry_handler import (
    RetryExhaustedException,
    RetryHandler,
)
from timesheet_engine.utils.logging_utils import LogContext, sanitize_sensitive_data

logger = logging.getLogger(__name__)


def extract_summary_text(result: Any) -> Optional[str]:
    """
    Pull the generated text out of a generateContent response.

    Args:
        result: Decoded JSON response

    Returns:
        First candidate's first text part, or None when absent or blank
    """
    if not isinstance(result, dict):
        return None
    candidates = result.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str) or not text.strip():
        return None
    return text


class SummaryService:
    """
    Sends assembled timesheet prompts to a generative language API.

    Features:
    - API key, endpoint and timeout from settings
    - Retries with exponential backoff on 429/5xx and network errors
    - Every failure surfaces as SummaryGenerationError
    """

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str,
        timeout: float = 30.0,
        retry_handler: Optional[RetryHandler] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the summarization client.

        Args:
            api_key: API key; None means summarization is not configured
            endpoint: Full generateContent URL (without the key)
            timeout: Request timeout in seconds
            retry_handler: Custom retry handler instance
            session: HTTP session to use
        """
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.retry_handler = retry_handler or RetryHandler()
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: TimesheetSettings) -> "SummaryService":
        """Create a client from application settings."""
        return cls(
            api_key=settings.summary_api_key,
            endpoint=settings.get_summary_endpoint(),
            timeout=settings.summary_timeout,
            retry_handler=RetryHandler(
                max_retries=settings.max_retries, base_delay=settings.retry_delay
            ),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def summarize(self, request: SummaryRequest) -> str:
        """
        Generate summary text for an assembled request.

        Args:
            request: Structured payload with the prompt

        Returns:
            Generated free-form text

        Raises:
            SummaryGenerationError: If the key is missing, the call fails,
                or the response holds no usable text
        """
        label = request.kind.capitalize()

        if not self.is_configured:
            raise SummaryGenerationError(
                "API key is not configured. Set SUMMARY_API_KEY in the environment "
                "or .env file."
            )

        with LogContext(report_kind=request.kind):
            logger.info(
                f"Requesting {request.kind} summary for "
                f"{request.start_date} to {request.end_date}"
            )
            logger.debug(
                "Summary request settings: %s",
                sanitize_sensitive_data(
                    {
                        "endpoint": self.endpoint,
                        "api_key": self.api_key,
                        "timeout": self.timeout,
                    }
                ),
            )

            try:
                result = self.retry_handler.execute_with_retry(
                    self._post, request.to_api_payload()
                )
            except RetryExhaustedException as e:
                logger.error(f"{label} summary failed after retries: {e}")
                raise SummaryGenerationError(
                    f"Error generating {request.kind} report: {e.last_exception or e}"
                ) from e
            except (requests.RequestException, ValueError) as e:
                logger.error(f"{label} summary request failed: {e}")
                raise SummaryGenerationError(
                    f"Error generating {request.kind} report: {e}"
                ) from e

            text = extract_summary_text(result)
            if text is None:
                logger.error(f"Unexpected or empty {request.kind} summary response")
                raise SummaryGenerationError(
                    f"Failed to generate {request.kind} report. Unexpected API "
                    f"response structure or empty content."
                )

            logger.info(f"{label} summary received ({len(text)} characters)")
            return text

    def _post(self, payload: Dict[str, Any]) -> Any:
        response = self.session.post(
            self.endpoint,
            params={"key": self.api_key},
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()
