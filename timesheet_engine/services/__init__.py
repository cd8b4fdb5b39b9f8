"""
External services for report delivery.

This package provides:
- SummaryService: generative language API client for report text
- RetryHandler: exponential backoff with jitter for transient HTTP failures
- compose_email: mailto handoff of a generated weekly report
"""

from .email_composer import EmailDraft, compose_email, weekly_subject
from .errors import EmailHandoffError, ReportError, SummaryGenerationError
from .retry_handler import RetryExhaustedException, RetryHandler, is_transient_error
from .summary_service import SummaryService, extract_summary_text

__all__ = [
    "EmailDraft",
    "EmailHandoffError",
    "ReportError",
    "RetryExhaustedException",
    "RetryHandler",
    "SummaryGenerationError",
    "SummaryService",
    "compose_email",
    "extract_summary_text",
    "is_transient_error",
    "weekly_subject",
]
