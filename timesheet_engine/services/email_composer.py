"""Email handoff for generated weekly reports.

Composes a mailto: link for the platform's mail client. Nothing is sent
from here; the draft is only built once its preconditions hold.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from timesheet_engine.services.errors import EmailHandoffError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailDraft:
    """A composed email ready for a mail client.

    Attributes:
        recipient: Destination address
        subject: Subject line
        body: Message body (the generated weekly report)
    """

    recipient: str
    subject: str
    body: str

    @property
    def mailto_url(self) -> str:
        return (
            f"mailto:{self.recipient}"
            f"?subject={quote(self.subject, safe='')}"
            f"&body={quote(self.body, safe='')}"
        )


def weekly_subject(employee_name: str, start_date: str, end_date: str) -> str:
    """Subject line for a weekly report email.

    Example:
        >>> weekly_subject("Jane Doe", "2024-06-10", "2024-06-16")
        'Weekly Timesheet Report - Jane Doe - Week of 2024-06-10 to 2024-06-16'
    """
    return (
        f"Weekly Timesheet Report - {employee_name or 'N/A'} - "
        f"Week of {start_date} to {end_date}"
    )


def compose_email(
    recipient: Optional[str],
    report_text: Optional[str],
    employee_name: str,
    start_date: str,
    end_date: str,
) -> EmailDraft:
    """Compose the weekly report email.

    Args:
        recipient: Recipient address entered by the user
        report_text: Previously generated weekly report
        employee_name: Employee shown in the subject
        start_date: Report range start
        end_date: Report range end

    Returns:
        EmailDraft for the mail client

    Raises:
        EmailHandoffError: If the report has not been generated or the
            recipient is missing
    """
    if not report_text or not report_text.strip():
        raise EmailHandoffError(
            "Please generate the weekly report first before sharing."
        )
    if not recipient or not recipient.strip():
        raise EmailHandoffError(
            "Please enter a recipient email address to share the report."
        )

    draft = EmailDraft(
        recipient=recipient.strip(),
        subject=weekly_subject(employee_name, start_date, end_date),
        body=report_text,
    )
    logger.info(f"Composed weekly report email for {start_date} to {end_date}")
    return draft
