"""Tests for issue payload parsing and the fetch step."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from a11ymetrics.errors import ApiError, DataValidationError
from a11ymetrics.fetcher import fetch_issues, parse_datetime, parse_issue_node, parse_issue_payload
from a11ymetrics.models import AnalysisRequest


def _node(number: int = 1, closer=None, comment_at="2026-01-01T02:00:00Z", **overrides) -> dict:
    node = {
        "closedAt": "2026-01-02T00:00:00Z",
        "createdAt": "2026-01-01T00:00:00Z",
        "number": number,
        "state": "CLOSED",
        "title": "Focus is lost",
        "url": f"https://github.com/octo/repo/issues/{number}",
        "firstComment": {"nodes": [{"createdAt": comment_at}] if comment_at else []},
        "comments": {"totalCount": 2 if comment_at else 0},
        "labels": {"nodes": [{"name": "a11y"}, {"name": "bug"}]},
        "timelineItems": {"nodes": [{"closer": closer}] if closer is not None else []},
    }
    node.update(overrides)
    return node


def _payload(issues, a11y_issues=None) -> dict:
    repository = {"issues": {"edges": [{"node": node} for node in issues]}}
    if a11y_issues is not None:
        repository["a11yIssues"] = {"edges": [{"node": node} for node in a11y_issues]}
    return {"data": {"repository": repository}}


def test_parse_datetime_handles_z_suffix_and_missing_values():
    """Verify GitHub timestamps parse to timezone-aware UTC datetimes."""
    assert parse_datetime("2026-01-01T00:00:00Z") == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert parse_datetime(None) is None
    assert parse_datetime("") is None


def test_parse_issue_node_maps_fields():
    """Verify a GraphQL issue node is mapped onto the Issue model."""
    issue = parse_issue_node(_node(closer={"__typename": "PullRequest", "title": "Fix focus"}))

    assert issue.number == 1
    assert issue.state == "CLOSED"
    assert issue.labels == ("a11y", "bug")
    assert issue.comment_count == 2
    assert issue.first_comment_at == datetime(2026, 1, 1, 2, tzinfo=timezone.utc)
    assert issue.closed_at == datetime(2026, 1, 2, tzinfo=timezone.utc)
    assert issue.closed_by_pull_request is True


def test_parse_issue_node_commit_closer_is_not_a_pull_request():
    """Verify an issue closed by a commit is not counted as resolved by a pull request."""
    issue = parse_issue_node(_node(closer={"__typename": "Commit"}))

    assert issue.closed_by_pull_request is False


def test_parse_issue_node_without_comments_or_close_event():
    """Verify missing first comment and close event map to None and False."""
    issue = parse_issue_node(_node(comment_at=None, closedAt=None, state="OPEN"))

    assert issue.first_comment_at is None
    assert issue.closed_at is None
    assert issue.comment_count == 0
    assert issue.closed_by_pull_request is False


def test_parse_issue_node_missing_required_fields_raises():
    """Verify nodes without number or creation time are rejected."""
    with pytest.raises(DataValidationError):
        parse_issue_node({"title": "no number"})


def test_parse_issue_payload_returns_both_populations():
    """Verify both connections are parsed from a successful response."""
    issue_sets = parse_issue_payload(_payload([_node(1), _node(2)], [_node(2)]))

    assert [issue.number for issue in issue_sets.issues] == [1, 2]
    assert [issue.number for issue in issue_sets.a11y_issues] == [2]


def test_parse_issue_payload_without_a11y_connection_yields_empty_population():
    """Verify a query without accessibility labels produces no accessibility issues."""
    issue_sets = parse_issue_payload(_payload([_node(1)]))

    assert issue_sets.a11y_issues == []


def test_parse_issue_payload_graphql_errors_raise():
    """Verify GraphQL application errors are surfaced to the caller."""
    payload = {"data": None, "errors": [{"message": "Could not resolve to a Repository"}]}

    with pytest.raises(DataValidationError, match="Could not resolve"):
        parse_issue_payload(payload)


def test_parse_issue_payload_rest_error_message_raises():
    """Verify authentication error bodies are reported with their message."""
    with pytest.raises(DataValidationError, match="Bad credentials"):
        parse_issue_payload({"message": "Bad credentials"})


def test_fetch_issues_success_threads_request_values():
    """Verify the request's owner, repository and labels reach the payload source."""
    source = Mock()
    source.fetch_issue_payload.return_value = _payload([_node(1)], [])
    request = AnalysisRequest(owner="octo", repository="repo", a11y_label_names=("a11y",))

    result = fetch_issues(source, request)

    assert result.ok
    assert len(result.value.issues) == 1
    source.fetch_issue_payload.assert_called_once_with("octo", "repo", ("a11y",))


def test_fetch_issues_transport_failure_returns_failure_result():
    """Verify transport failures are reported as a failed result, not raised."""
    source = Mock()
    source.fetch_issue_payload.side_effect = ApiError("connection refused")

    result = fetch_issues(source, AnalysisRequest(owner="octo", repository="repo"))

    assert not result.ok
    assert result.value is None
    assert "connection refused" in result.error


def test_fetch_issues_error_payload_returns_failure_result():
    """Verify GraphQL error payloads become failed results."""
    source = Mock()
    source.fetch_issue_payload.return_value = {"errors": [{"message": "boom"}]}

    result = fetch_issues(source, AnalysisRequest(owner="octo", repository="repo"))

    assert not result.ok
    assert "boom" in result.error
