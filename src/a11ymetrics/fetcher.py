"""Issue payload parsing and the fetch step of an analysis."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .errors import ApiError, DataValidationError
from .models import AnalysisRequest, FetchResult, Issue, IssueSets

logger = logging.getLogger(__name__)


class IssuePayloadSource(Protocol):
    """Anything that can run the combined issue query: GitHub itself or the relay."""

    def fetch_issue_payload(
        self,
        owner: str,
        repository: str,
        a11y_label_names: Sequence[str],
    ) -> Dict[str, Any]:
        ...


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse GitHub ISO8601 timestamps into timezone-aware datetimes."""
    if not value:
        return None

    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _nodes(container: Any) -> List[Dict[str, Any]]:
    if not isinstance(container, dict):
        return []
    return [node for node in container.get("nodes") or [] if isinstance(node, dict)]


def parse_issue_node(node: Dict[str, Any]) -> Issue:
    """Convert one GraphQL issue node into an ``Issue``.

    Raises:
        DataValidationError: If required fields are missing.
    """
    number = node.get("number")
    created_at = parse_datetime(node.get("createdAt"))
    state = node.get("state")
    if number is None or created_at is None or not state:
        raise DataValidationError(f"GitHub issue payload is missing required fields: payload={node}")

    first_comments = _nodes(node.get("firstComment"))
    close_events = _nodes(node.get("timelineItems"))
    closer = close_events[0].get("closer") if close_events else None

    return Issue(
        number=int(number),
        title=str(node.get("title") or ""),
        state=str(state),
        created_at=created_at,
        closed_at=parse_datetime(node.get("closedAt")),
        url=str(node.get("url") or ""),
        labels=tuple(str(label["name"]) for label in _nodes(node.get("labels")) if label.get("name")),
        comment_count=int((node.get("comments") or {}).get("totalCount") or 0),
        first_comment_at=parse_datetime(first_comments[0].get("createdAt")) if first_comments else None,
        closed_by_pull_request=isinstance(closer, dict) and closer.get("__typename") == "PullRequest",
    )


def _parse_connection(connection: Any) -> List[Issue]:
    if not isinstance(connection, dict):
        return []
    return [
        parse_issue_node(edge["node"])
        for edge in connection.get("edges") or []
        if isinstance(edge, dict) and isinstance(edge.get("node"), dict)
    ]


def parse_issue_payload(payload: Dict[str, Any]) -> IssueSets:
    """Turn a combined-query response into the two issue populations.

    A missing ``a11yIssues`` connection means no accessibility label set was
    queried and yields an empty accessibility population.

    Raises:
        DataValidationError: If the payload carries GraphQL ``errors``, a REST
            style error ``message``, or no repository data.
    """
    errors = payload.get("errors")
    if errors:
        messages = "; ".join(
            str(error.get("message", error)) if isinstance(error, dict) else str(error)
            for error in errors
        )
        raise DataValidationError(f"GitHub GraphQL returned errors: {messages}")

    data = payload.get("data")
    repository = data.get("repository") if isinstance(data, dict) else None
    if not isinstance(repository, dict):
        message = payload.get("message")
        if message:
            raise DataValidationError(f"GitHub API returned an error: {message}")
        raise DataValidationError("GitHub GraphQL response does not contain repository data.")

    return IssueSets(
        issues=_parse_connection(repository.get("issues")),
        a11y_issues=_parse_connection(repository.get("a11yIssues")),
    )


def fetch_issues(source: IssuePayloadSource, request: AnalysisRequest) -> FetchResult[IssueSets]:
    """Fetch and parse both issue populations for an analysis request.

    Transport failures and error payloads are logged and returned as a failed
    result rather than raised.
    """
    try:
        payload = source.fetch_issue_payload(
            request.owner,
            request.repository,
            request.a11y_label_names,
        )
        issue_sets = parse_issue_payload(payload)
    except (ApiError, DataValidationError) as exc:
        logger.warning(
            "Issue fetch failed",
            extra={
                "owner": request.owner,
                "repository": request.repository,
                "generation": request.generation,
                "error": str(exc),
            },
        )
        return FetchResult.failure(str(exc))

    logger.debug(
        "Fetched issues",
        extra={
            "owner": request.owner,
            "repository": request.repository,
            "issues": len(issue_sets.issues),
            "a11y_issues": len(issue_sets.a11y_issues),
        },
    )
    return FetchResult.success(issue_sets)
