"""Writers module for exporting timesheets.

This module renders daily and weekly timesheets as CSV text and saves
generated output to local files.
"""

from timesheet_engine.writers.csv_report_writer import (
    DAY_COLUMNS,
    JOB_COLUMNS,
    TimesheetCsvWriter,
    export_filename,
    render_rows,
    sanitize_filename,
)

__all__ = [
    "DAY_COLUMNS",
    "JOB_COLUMNS",
    "TimesheetCsvWriter",
    "export_filename",
    "render_rows",
    "sanitize_filename",
]
