"""Unit tests for the daily-report command."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from timesheet_engine.cli.commands.daily import daily_report
from timesheet_engine.services.errors import SummaryGenerationError

SUMMARIZE = "timesheet_engine.services.summary_service.SummaryService.summarize"
MONDAY_JOB = "2024-06-10,J-100,Depot,08:00,08:30,16:30,17:00"


@pytest.fixture
def runner():
    return CliRunner()


class TestDailyReportCommand:
    """Test suite for daily-report."""

    def test_hours_for_one_job(self, runner, mock_env):
        result = runner.invoke(
            daily_report, ["--date", "2024-06-10", "--job", MONDAY_JOB]
        )
        assert result.exit_code == 0, result.output
        assert "Monday, 2024-06-10" in result.output
        assert "J-100" in result.output
        assert "Total Hours:       9.00" in result.output
        assert "Net Working Hours: 7.50" in result.output
        assert "On-Call Day:       No" in result.output

    def test_on_call_skips_travel_deduction(self, runner, mock_env):
        result = runner.invoke(
            daily_report, ["--date", "2024-06-10", "--job", MONDAY_JOB, "--on-call"]
        )
        assert result.exit_code == 0, result.output
        assert "Net Working Hours: 8.50" in result.output
        assert "On-Call Day:       Yes" in result.output

    def test_empty_day(self, runner, mock_env):
        result = runner.invoke(daily_report, ["--date", "2024-06-10"])
        assert result.exit_code == 0, result.output
        assert "Total Hours:       0.00" in result.output

    def test_validation_findings_are_printed(self, runner, mock_env):
        result = runner.invoke(
            daily_report, ["--date", "2024-06-10", "--job", "2024-06-10,J-1,,8h,16:00"]
        )
        assert result.exit_code == 0, result.output
        assert "Unrecognized time" in result.output

    def test_invalid_date(self, runner, mock_env):
        result = runner.invoke(daily_report, ["--date", "06/10/2024"])
        assert result.exit_code == 3
        assert "Invalid date" in result.output

    def test_job_for_another_date(self, runner, mock_env):
        result = runner.invoke(
            daily_report,
            ["--date", "2024-06-11", "--job", MONDAY_JOB],
        )
        assert result.exit_code == 3
        assert "Jobs dated 2024-06-10 do not belong to 2024-06-11" in result.output

    def test_csv_into_directory(self, runner, mock_env, tmp_path):
        result = runner.invoke(
            daily_report,
            [
                "--date", "2024-06-10",
                "--employee", "Jane Doe",
                "--job", MONDAY_JOB,
                "--csv", str(tmp_path),
            ],
        )
        assert result.exit_code == 0, result.output
        written = tmp_path / "Jane_Doe_timesheet_2024-06-10.csv"
        assert written.exists()
        content = written.read_text(encoding="utf-8")
        assert "Daily Timesheet" in content
        assert "Net Working Hours,7.50" in content
        assert "CSV written to" in result.output

    def test_show_prompt(self, runner, mock_env):
        result = runner.invoke(
            daily_report,
            ["--date", "2024-06-10", "--employee", "Jane Doe", "--show-prompt"],
        )
        assert result.exit_code == 0, result.output
        assert "Employee Name: Jane Doe" in result.output

    def test_summarize(self, runner, mock_env):
        with patch(SUMMARIZE, return_value="Worked on J-100.") as mock_summarize:
            result = runner.invoke(
                daily_report,
                ["--date", "2024-06-10", "--job", MONDAY_JOB, "--summarize"],
            )
        assert result.exit_code == 0, result.output
        assert "Daily report generated" in result.output
        assert "Worked on J-100." in result.output
        request = mock_summarize.call_args.args[0]
        assert "J-100" in request.prompt

    def test_summarize_without_api_key(self, runner, clean_env):
        result = runner.invoke(daily_report, ["--date", "2024-06-10", "--summarize"])
        assert result.exit_code == 1
        assert "Summarization API key is not configured" in result.output

    def test_summarize_failure(self, runner, mock_env):
        with patch(SUMMARIZE, side_effect=SummaryGenerationError("Service unavailable")):
            result = runner.invoke(
                daily_report, ["--date", "2024-06-10", "--summarize"]
            )
        assert result.exit_code == 2
        assert "API Error: Service unavailable" in result.output
