"""Issue analysis logic for accessibility metrics.

This module folds issue snapshots into per-population buckets and derives
the comparison statistics:
- resolution rate (closed by a pull request)
- average comment count
- average time to close and to first comment (milliseconds)
- share of recent issues that are accessibility-related
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Collection, Iterable, Optional

from .classifier import is_accessibility_issue
from .models import AnalysisResult, BucketStats, Issue, IssueBucket, IssueDetails
from .stats import average, format_duration, percentage

logger = logging.getLogger(__name__)

CLOSED_STATE = "CLOSED"


def _elapsed_ms(issue: Issue, start: datetime, end: datetime, metric: str) -> Optional[float]:
    try:
        duration_ms = (end - start).total_seconds() * 1000
    except TypeError:
        logger.debug(
            "Skipping duration due to incompatible datetime types",
            extra={"issue_number": issue.number, "metric": metric},
        )
        return None

    if duration_ms < 0:
        logger.debug(
            "Skipping duration due to negative value",
            extra={"issue_number": issue.number, "metric": metric, "duration_ms": duration_ms},
        )
        return None

    return duration_ms


def extract_details(issue: Issue) -> IssueDetails:
    """Extract the per-issue measurements used by the analyzer.

    Business logic:
    - ``comment_count`` is the issue's total comment count.
    - ``is_resolved`` is true only when the last close event names a pull request.
    - ``time_to_close`` is ``closed_at - created_at`` for closed issues.
    - ``time_to_comment`` is ``first_comment_at - created_at`` when a comment exists.

    Durations that do not apply are ``None`` so they stay out of the averages.
    """
    time_to_close = None
    if issue.state == CLOSED_STATE and issue.closed_at is not None:
        time_to_close = _elapsed_ms(issue, issue.created_at, issue.closed_at, "time_to_close")

    time_to_comment = None
    if issue.first_comment_at is not None:
        time_to_comment = _elapsed_ms(
            issue, issue.created_at, issue.first_comment_at, "time_to_comment"
        )

    return IssueDetails(
        comment_count=issue.comment_count,
        is_resolved=issue.closed_by_pull_request,
        time_to_close=time_to_close,
        time_to_comment=time_to_comment,
    )


def fold_issues(
    issues: Iterable[Issue],
    repo_a11y_label_names: Optional[Collection[str]] = None,
) -> IssueBucket:
    """Fold issues into a bucket.

    When ``repo_a11y_label_names`` is given, issues matching the broader
    label-or-title classifier are also counted in ``matching_a11y_count``.
    """
    bucket = IssueBucket()
    for issue in issues:
        bucket.add(extract_details(issue))
        if repo_a11y_label_names is not None and is_accessibility_issue(
            issue, repo_a11y_label_names
        ):
            bucket.matching_a11y_count += 1
    return bucket


def summarize_bucket(bucket: IssueBucket, include_a11y_percent: bool = False) -> BucketStats:
    """Derive averages and rates for a finalized bucket."""
    avg_time_to_close_ms = average(bucket.times_to_close)
    avg_time_to_comment_ms = average(bucket.times_to_comment)

    return BucketStats(
        count=bucket.count,
        resolved_count=bucket.resolved_count,
        resolve_rate=percentage(bucket.resolved_count, bucket.count),
        avg_comment_count=average(bucket.comment_counts),
        avg_time_to_close_ms=avg_time_to_close_ms,
        avg_time_to_comment_ms=avg_time_to_comment_ms,
        avg_time_to_close=format_duration(avg_time_to_close_ms),
        avg_time_to_comment=format_duration(avg_time_to_comment_ms),
        a11y_percent=(
            percentage(bucket.matching_a11y_count, bucket.count) if include_a11y_percent else None
        ),
    )


def analyze(
    all_issues: Iterable[Issue],
    a11y_issues: Iterable[Issue],
    repo_a11y_label_names: Collection[str],
) -> AnalysisResult:
    """Compare recent issues against accessibility issues.

    ``a11y_issues`` is already known to be accessibility-related (it comes from
    the label filter of the query) and is not re-classified. Empty inputs
    produce NaN statistics rather than errors.
    """
    label_names = frozenset(repo_a11y_label_names)
    all_bucket = fold_issues(all_issues, label_names)
    a11y_bucket = fold_issues(a11y_issues)

    logger.info(
        "Analyzed issues",
        extra={
            "issues_total": all_bucket.count,
            "a11y_matches": all_bucket.matching_a11y_count,
            "a11y_issues_total": a11y_bucket.count,
            "close_samples": len(all_bucket.times_to_close),
            "comment_samples": len(all_bucket.times_to_comment),
        },
    )

    return AnalysisResult(
        all=summarize_bucket(all_bucket, include_a11y_percent=True),
        a11y_issues=summarize_bucket(a11y_bucket),
    )
