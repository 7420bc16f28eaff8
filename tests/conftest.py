"""Shared builders for accessibility metrics tests."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Sequence

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from a11ymetrics.models import Issue

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_issue(
    number: int = 1,
    title: str = "Something is broken",
    state: str = "OPEN",
    labels: Sequence[str] = (),
    comment_count: int = 0,
    closed_after_hours: Optional[float] = None,
    first_comment_after_hours: Optional[float] = None,
    closed_by_pull_request: bool = False,
) -> Issue:
    return Issue(
        number=number,
        title=title,
        state=state,
        created_at=BASE_TIME,
        closed_at=None if closed_after_hours is None else BASE_TIME + timedelta(hours=closed_after_hours),
        url=f"https://github.com/octo/repo/issues/{number}",
        labels=tuple(labels),
        comment_count=comment_count,
        first_comment_at=(
            None
            if first_comment_after_hours is None
            else BASE_TIME + timedelta(hours=first_comment_after_hours)
        ),
        closed_by_pull_request=closed_by_pull_request,
    )
