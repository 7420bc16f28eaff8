"""Statistics and formatting helpers for accessibility issue reporting.

This module provides utilities for:
- Averaging samples, with NaN as the value for "no data".
- Formatting millisecond durations as hours or days and hours.
- Building a human-readable report comparing all issues to accessibility issues.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .models import AnalysisRequest, AnalysisResult, Label

MS_PER_HOUR = 3_600_000
HOURS_PER_DAY = 24


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


def average(values: Sequence[float]) -> float:
    """Return the arithmetic mean, or NaN for an empty sequence."""
    if not values:
        return math.nan
    return sum(values) / len(values)


def percentage(part: int, whole: int) -> float:
    """Return ``100 * part / whole``, or NaN when ``whole`` is zero."""
    if whole == 0:
        return math.nan
    return 100 * part / whole


def _is_missing(value: Optional[float]) -> bool:
    return value is None or math.isnan(value)


def format_duration(milliseconds: Optional[float]) -> str:
    """Format a millisecond duration rounded to whole hours.

    Durations under a day render as ``"{h} hours"``; longer ones as
    ``"{d} days, {h} hours"``.

    Args:
        milliseconds: Duration in milliseconds.

    Returns:
        ``"n/a"`` when ``milliseconds`` is ``None`` or NaN; otherwise the
        formatted duration.
    """
    if _is_missing(milliseconds):
        return "n/a"

    hour_count = round_half_up(milliseconds / MS_PER_HOUR)
    if hour_count < HOURS_PER_DAY:
        return f"{hour_count} hours"

    days = hour_count // HOURS_PER_DAY
    hours = hour_count % HOURS_PER_DAY
    return f"{days} days, {hours} hours"


def format_rounded(value: Optional[float], suffix: str = "") -> str:
    """Round a statistic for display, rendering missing values as ``"n/a"``."""
    if _is_missing(value):
        return "n/a"
    return f"{round_half_up(value)}{suffix}"


def format_labels(labels: Sequence[Label]) -> List[str]:
    """Render one line per label: name, swatch color and browser URL."""
    return [f"- {label.name} (#{label.color}) {label.html_url}" for label in labels]


def generate_report(
    request: AnalysisRequest,
    labels: Sequence[Label],
    result: Optional[AnalysisResult] = None,
) -> str:
    """Generate a human-readable accessibility issue report for a repository.

    The report lists the repository's accessibility labels and, when an
    analysis result is given, the share of accessibility issues among recent
    issues plus a side-by-side table of:
    - percent resolved with a pull request
    - average number of comments
    - average time to close
    - average time to first comment

    Args:
        request: The analysis request the report describes.
        labels: Accessibility labels found in the repository.
        result: Optional analysis result; omitted for a labels-only report.

    Returns:
        Formatted multi-line text report.
    """
    lines = [
        f"Repository: {request.owner}/{request.repository}",
        "Accessibility Issue Report",
        "",
        f"Accessibility labels ({len(labels)}):",
    ]
    lines.extend(format_labels(labels) or ["- none found"])

    if result is None:
        return "\n".join(lines)

    all_stats = result.all
    a11y_stats = result.a11y_issues
    rows = [
        (
            "% Resolved with PR",
            format_rounded(all_stats.resolve_rate, "%"),
            format_rounded(a11y_stats.resolve_rate, "%"),
        ),
        (
            "Average # comments",
            format_rounded(all_stats.avg_comment_count),
            format_rounded(a11y_stats.avg_comment_count),
        ),
        ("Average time to close", all_stats.avg_time_to_close, a11y_stats.avg_time_to_close),
        (
            "Average time to 1st comment",
            all_stats.avg_time_to_comment,
            a11y_stats.avg_time_to_comment,
        ),
    ]

    header = ("", "All Issues", "A11y Issues")
    widths = [max(len(row[column]) for row in [header, *rows]) for column in range(3)]

    lines.extend(
        [
            "",
            "Percent of accessibility issues in last "
            f"{all_stats.count} issues: {format_rounded(all_stats.a11y_percent, '%')}",
            "",
        ]
    )
    for row in [header, *rows]:
        lines.append("   ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())

    return "\n".join(lines)
