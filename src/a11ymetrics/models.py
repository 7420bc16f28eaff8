"""Domain models for accessibility issue metrics.

These dataclasses model only the subset of GitHub payload fields that the
classification and aggregation steps need.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")

_API_REPOS_PREFIX = "https://api.github.com/repos/"
_WEB_PREFIX = "https://github.com/"


@dataclass(slots=True, frozen=True)
class Label:
    """Represents a repository label returned by the GitHub REST API."""

    name: str
    color: str
    url: str

    @property
    def html_url(self) -> str:
        """Browser URL of the label."""
        return self.url.replace(_API_REPOS_PREFIX, _WEB_PREFIX)


@dataclass(slots=True, frozen=True)
class Issue:
    """Snapshot of an issue at fetch time."""

    number: int
    title: str
    state: str
    created_at: datetime
    closed_at: Optional[datetime]
    url: str
    labels: Tuple[str, ...]
    comment_count: int
    first_comment_at: Optional[datetime]
    closed_by_pull_request: bool


@dataclass(slots=True)
class IssueDetails:
    """Per-issue measurements; durations are milliseconds."""

    comment_count: int
    is_resolved: bool
    time_to_close: Optional[float]
    time_to_comment: Optional[float]


@dataclass(slots=True)
class IssueBucket:
    """Accumulator of per-issue statistics for one issue population."""

    count: int = 0
    matching_a11y_count: int = 0
    comment_counts: List[int] = field(default_factory=list)
    resolved_count: int = 0
    times_to_close: List[float] = field(default_factory=list)
    times_to_comment: List[float] = field(default_factory=list)

    def add(self, details: IssueDetails) -> None:
        """Fold one issue's details into the bucket."""
        self.count += 1
        self.comment_counts.append(details.comment_count)
        if details.is_resolved:
            self.resolved_count += 1
        if details.time_to_close is not None:
            self.times_to_close.append(details.time_to_close)
        if details.time_to_comment is not None:
            self.times_to_comment.append(details.time_to_comment)


@dataclass(slots=True)
class BucketStats:
    """Derived statistics for one bucket. NaN means insufficient data."""

    count: int
    resolved_count: int
    resolve_rate: float
    avg_comment_count: float
    avg_time_to_close_ms: float
    avg_time_to_comment_ms: float
    avg_time_to_close: str
    avg_time_to_comment: str
    a11y_percent: Optional[float] = None


@dataclass(slots=True)
class AnalysisResult:
    """Comparison of all recent issues against accessibility issues."""

    all: BucketStats
    a11y_issues: BucketStats


@dataclass(slots=True)
class IssueSets:
    """The two issue populations returned by the combined query."""

    issues: List[Issue]
    a11y_issues: List[Issue]


@dataclass(slots=True, frozen=True)
class AnalysisRequest:
    """One analysis run, threaded explicitly through fetch and analysis."""

    owner: str
    repository: str
    a11y_label_names: Tuple[str, ...] = ()
    generation: int = 0

    def with_labels(self, label_names: List[str]) -> AnalysisRequest:
        """Return a copy of this request carrying the accessibility label set."""
        return replace(self, a11y_label_names=tuple(label_names))


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a fetch that separates "empty" from "failed"."""

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> FetchResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> FetchResult[T]:
        return cls(ok=False, error=error)
