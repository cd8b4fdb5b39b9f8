"""Output formatting utilities for CLI."""

from typing import List, Sequence

import click


def format_success(message: str) -> str:
    """Format a success message in green."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message in red."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message in yellow."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message in blue."""
    return click.style(f"ℹ {message}", fg="blue")


def format_table(
    headers: Sequence[str], rows: List[Sequence[object]], max_width: int = 40
) -> str:
    """Format rows as an ASCII table.

    Args:
        headers: Column headers
        rows: Data rows; cells beyond the header count are ignored
        max_width: Cells longer than this are truncated

    Returns:
        Table text, "" when there are no headers

    Example:
        >>> print(format_table(["Date", "Hours"], [["2024-06-10", "8.00"]]))
        +------------+-------+
        | Date       | Hours |
        +------------+-------+
        | 2024-06-10 | 8.00  |
        +------------+-------+
    """
    if not headers:
        return ""

    cells = [[str(cell) for cell in row[: len(headers)]] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    widths = [min(w, max_width) for w in widths]

    def line(values: Sequence[str]) -> str:
        padded = list(values) + [""] * (len(widths) - len(values))
        return (
            "|"
            + "|".join(f" {v[:w]:<{w}} " for v, w in zip(padded, widths))
            + "|"
        )

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [separator, line(list(headers)), separator]
    if cells:
        lines.extend(line(row) for row in cells)
        lines.append(separator)
    return "\n".join(lines)
