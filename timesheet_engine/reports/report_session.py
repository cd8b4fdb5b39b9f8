"""Report session: generated daily/weekly reports and their lifecycle.

A session holds the most recent generated text for each report kind, the
selected weekly range and a user-facing error message. Summaries are
requested in two steps (prepare, then complete or fail) so that a slow
response can be checked against newer requests and newer edits before it
is shown.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from timesheet_engine.aggregators.timesheet_store import (
    DateKey,
    TimesheetStore,
    as_date_text,
)
from timesheet_engine.calculators.time_utils import week_bounds
from timesheet_engine.models.summary import SummaryRequest
from timesheet_engine.reports.prompt_builder import PromptBuilder
from timesheet_engine.services.email_composer import EmailDraft, compose_email
from timesheet_engine.services.errors import EmailHandoffError, ReportError
from timesheet_engine.services.summary_service import SummaryService
from timesheet_engine.utils.logging_utils import LogContext, generate_correlation_id

logger = logging.getLogger(__name__)

DAILY = "daily"
WEEKLY = "weekly"


@dataclass(frozen=True)
class PendingReport:
    """A summary request that has been issued but not yet answered."""

    token: str
    kind: str
    revision: int
    request: SummaryRequest


class ReportSession:
    """Tracks generated reports against a timesheet store.

    Attributes:
        store: Store the reports are built from
        builder: Prompt builder over the same store
        service: Summarization client
        generated_daily_report: Last accepted daily report text
        generated_weekly_report: Last accepted weekly report text
        error_message: Last user-visible failure, "" when none
        weekly_start: Selected weekly range start (ISO)
        weekly_end: Selected weekly range end (ISO)

    Example:
        >>> session = ReportSession(store, service=SummaryService.from_settings(get_config()))
        >>> session.generate_weekly_report("2024-06-10", "2024-06-16")
        >>> draft = session.share_weekly_report_via_email("payroll@example.com")
    """

    def __init__(
        self,
        store: TimesheetStore,
        builder: Optional[PromptBuilder] = None,
        service: Optional[SummaryService] = None,
    ):
        self.store = store
        self.builder = builder or PromptBuilder(store)
        self.service = service

        self.generated_daily_report: Optional[str] = None
        self.generated_weekly_report: Optional[str] = None
        self.error_message = ""
        self.weekly_start, self.weekly_end = week_bounds()

        self._latest_tokens: Dict[str, str] = {}
        self._seen_revision = store.revision

    def sync(self) -> None:
        """Drop generated reports if the store changed since they were made."""
        if self.store.revision == self._seen_revision:
            return
        if self.generated_daily_report or self.generated_weekly_report:
            logger.info("Timesheet data changed, clearing generated reports")
        self.generated_daily_report = None
        self.generated_weekly_report = None
        self._seen_revision = self.store.revision

    def set_weekly_range(self, start_date: DateKey, end_date: DateKey) -> None:
        self.weekly_start = as_date_text(start_date)
        self.weekly_end = as_date_text(end_date)

    # ------------------------------------------------------------------
    # Two-step request lifecycle
    # ------------------------------------------------------------------

    def prepare_daily(self, date: DateKey) -> PendingReport:
        """Build a daily request and make it the latest for its kind."""
        return self._issue(DAILY, self.builder.build_daily_request(date))

    def prepare_weekly(
        self, start_date: Optional[DateKey] = None, end_date: Optional[DateKey] = None
    ) -> PendingReport:
        """Build a weekly request for the given or currently selected range."""
        if start_date is not None and end_date is not None:
            self.set_weekly_range(start_date, end_date)
        request = self.builder.build_weekly_request(self.weekly_start, self.weekly_end)
        return self._issue(WEEKLY, request)

    def is_current(self, pending: PendingReport) -> bool:
        """True when no newer request or store edit has superseded this one."""
        return (
            self._latest_tokens.get(pending.kind) == pending.token
            and self.store.revision == pending.revision
        )

    def complete(self, pending: PendingReport, text: str) -> bool:
        """Apply a summary response.

        Returns:
            True if the text was accepted, False if it was stale
        """
        with LogContext(correlation_id=pending.token, report_kind=pending.kind):
            if not self.is_current(pending):
                logger.info(f"Discarding stale {pending.kind} report response")
                return False

            self.sync()
            if pending.kind == DAILY:
                self.generated_daily_report = text
            else:
                self.generated_weekly_report = text
            self._latest_tokens.pop(pending.kind, None)
            logger.info(f"Accepted {pending.kind} report")
            return True

    def fail(self, pending: PendingReport, error: ReportError) -> bool:
        """Record a failed request; the other report kind is left alone.

        Returns:
            True if the error was recorded, False if it was stale
        """
        with LogContext(correlation_id=pending.token, report_kind=pending.kind):
            if not self.is_current(pending):
                logger.info(f"Discarding stale {pending.kind} report failure")
                return False

            self.error_message = error.message
            self._latest_tokens.pop(pending.kind, None)
            logger.warning(f"{pending.kind.capitalize()} report failed: {error.message}")
            return True

    # ------------------------------------------------------------------
    # One-call operations
    # ------------------------------------------------------------------

    def generate_daily_report(self, date: DateKey) -> Optional[str]:
        """Generate and store the daily report for a date.

        Returns:
            The accepted report text, or None on failure
        """
        return self._run(self.prepare_daily(date))

    def generate_weekly_report(
        self, start_date: Optional[DateKey] = None, end_date: Optional[DateKey] = None
    ) -> Optional[str]:
        """Generate and store the weekly report for a range.

        Returns:
            The accepted report text, or None on failure
        """
        return self._run(self.prepare_weekly(start_date, end_date))

    def share_weekly_report_via_email(self, recipient: Optional[str]) -> EmailDraft:
        """Compose an email carrying the generated weekly report.

        Raises:
            EmailHandoffError: If no weekly report exists or the recipient
                is missing; the message is also kept in error_message
        """
        self.sync()
        self.error_message = ""
        try:
            return compose_email(
                recipient,
                self.generated_weekly_report,
                self.store.employee_name,
                self.weekly_start,
                self.weekly_end,
            )
        except EmailHandoffError as e:
            self.error_message = e.message
            raise

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _issue(self, kind: str, request: SummaryRequest) -> PendingReport:
        self.sync()
        self.error_message = ""
        pending = PendingReport(
            token=generate_correlation_id(),
            kind=kind,
            revision=self.store.revision,
            request=request,
        )
        self._latest_tokens[kind] = pending.token
        logger.debug(f"Issued {kind} report request {pending.token}")
        return pending

    def _run(self, pending: PendingReport) -> Optional[str]:
        if self.service is None:
            raise ValueError("ReportSession has no summary service configured")

        try:
            text = self.service.summarize(pending.request)
        except ReportError as e:
            self.fail(pending, e)
            return None

        if not self.complete(pending, text):
            return None
        return text
