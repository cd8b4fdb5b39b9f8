"""Unit tests for the report session lifecycle."""

from unittest.mock import Mock, patch

import pytest

from timesheet_engine.reports.report_session import ReportSession
from timesheet_engine.services.errors import EmailHandoffError, SummaryGenerationError
from timesheet_engine.services.summary_service import SummaryService

WEEK = ("2024-06-10", "2024-06-16")


@pytest.fixture
def service():
    return Mock(spec=SummaryService)


@pytest.fixture
def session(populated_store, service):
    return ReportSession(populated_store, service=service)


class TestGenerateReports:
    """Test one-call generation."""

    def test_daily_report_stored(self, session, service):
        service.summarize.return_value = "Daily summary text"
        assert session.generate_daily_report("2024-06-10") == "Daily summary text"
        assert session.generated_daily_report == "Daily summary text"
        assert session.error_message == ""
        request = service.summarize.call_args[0][0]
        assert request.kind == "daily"
        assert request.start_date == "2024-06-10"

    def test_weekly_report_sets_range(self, session, service):
        service.summarize.return_value = "Weekly summary text"
        assert session.generate_weekly_report(*WEEK) == "Weekly summary text"
        assert session.generated_weekly_report == "Weekly summary text"
        assert (session.weekly_start, session.weekly_end) == WEEK

    def test_weekly_defaults_to_current_week(self, populated_store, service):
        with patch(
            "timesheet_engine.reports.report_session.week_bounds",
            return_value=WEEK,
        ):
            session = ReportSession(populated_store, service=service)
        service.summarize.return_value = "text"
        session.generate_weekly_report()
        assert service.summarize.call_args[0][0].start_date == "2024-06-10"

    def test_failure_keeps_other_report(self, session, service):
        service.summarize.return_value = "Weekly summary text"
        session.generate_weekly_report(*WEEK)

        service.summarize.side_effect = SummaryGenerationError(
            "Error generating daily report: boom"
        )
        assert session.generate_daily_report("2024-06-10") is None
        assert session.error_message == "Error generating daily report: boom"
        assert session.generated_daily_report is None
        assert session.generated_weekly_report == "Weekly summary text"

    def test_new_request_clears_error(self, session, service):
        service.summarize.side_effect = SummaryGenerationError("failed")
        session.generate_daily_report("2024-06-10")
        assert session.error_message == "failed"

        service.summarize.side_effect = None
        service.summarize.return_value = "ok"
        session.generate_daily_report("2024-06-10")
        assert session.error_message == ""

    def test_requires_service(self, populated_store):
        with pytest.raises(ValueError):
            ReportSession(populated_store).generate_daily_report("2024-06-10")


class TestStaleness:
    """Test last-response-wins and edit invalidation."""

    def test_newer_request_wins(self, session):
        first = session.prepare_daily("2024-06-10")
        second = session.prepare_daily("2024-06-12")

        assert session.complete(second, "second") is True
        assert session.complete(first, "first") is False
        assert session.generated_daily_report == "second"

    def test_tokens_are_per_kind(self, session):
        daily = session.prepare_daily("2024-06-10")
        weekly = session.prepare_weekly(*WEEK)
        assert session.complete(daily, "daily")
        assert session.complete(weekly, "weekly")

    def test_edit_during_request_discards_result(self, session, populated_store):
        pending = session.prepare_weekly(*WEEK)
        populated_store.set_on_call("2024-06-10", True)

        assert session.complete(pending, "outdated") is False
        assert session.generated_weekly_report is None

    def test_stale_failure_is_ignored(self, session):
        first = session.prepare_daily("2024-06-10")
        session.prepare_daily("2024-06-10")
        assert session.fail(first, SummaryGenerationError("late error")) is False
        assert session.error_message == ""

    def test_edit_clears_generated_reports(self, session, service, populated_store):
        service.summarize.return_value = "text"
        session.generate_daily_report("2024-06-10")
        session.generate_weekly_report(*WEEK)

        populated_store.set_truck_number("T-99")
        session.sync()

        assert session.generated_daily_report is None
        assert session.generated_weekly_report is None

    def test_completed_token_cannot_be_reused(self, session):
        pending = session.prepare_daily("2024-06-10")
        assert session.complete(pending, "once")
        assert session.complete(pending, "twice") is False
        assert session.generated_daily_report == "once"


class TestShareViaEmail:
    """Test email handoff of the weekly report."""

    def test_requires_generated_report(self, session):
        with pytest.raises(EmailHandoffError) as exc_info:
            session.share_weekly_report_via_email("payroll@example.com")
        assert "generate the weekly report first" in exc_info.value.message
        assert session.error_message == exc_info.value.message

    def test_requires_recipient(self, session, service):
        service.summarize.return_value = "Weekly summary"
        session.generate_weekly_report(*WEEK)
        with pytest.raises(EmailHandoffError, match="recipient email address"):
            session.share_weekly_report_via_email("  ")

    def test_composes_draft(self, session, service):
        service.summarize.return_value = "Weekly summary"
        session.generate_weekly_report(*WEEK)
        draft = session.share_weekly_report_via_email("payroll@example.com")
        assert draft.recipient == "payroll@example.com"
        assert draft.subject == (
            "Weekly Timesheet Report - Jane Doe - Week of 2024-06-10 to 2024-06-16"
        )
        assert draft.body == "Weekly summary"

    def test_report_cleared_by_edit_cannot_be_shared(
        self, session, service, populated_store
    ):
        service.summarize.return_value = "Weekly summary"
        session.generate_weekly_report(*WEEK)
        populated_store.set_employee_name("Someone Else")
        with pytest.raises(EmailHandoffError):
            session.share_weekly_report_via_email("payroll@example.com")
