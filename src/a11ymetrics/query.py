"""GraphQL query construction for the combined issue fetch."""

from __future__ import annotations

import json
from typing import Dict, Sequence

ISSUE_PAGE_SIZE = 100
LABELS_PER_ISSUE = 5

ISSUE_FIELDS_FRAGMENT = f"""fragment issueFields on IssueConnection {{
  edges {{
    node {{
      closedAt
      createdAt
      number
      state
      title
      url
      firstComment: comments(first: 1) {{
        nodes {{
          createdAt
        }}
      }}
      comments {{
        totalCount
      }}
      labels(first: {LABELS_PER_ISSUE}) {{
        nodes {{
          name
        }}
      }}
      timelineItems(itemTypes: CLOSED_EVENT, last: 1) {{
        nodes {{
          ... on ClosedEvent {{
            closer {{
              __typename
              ... on PullRequest {{
                title
                closedAt
              }}
            }}
          }}
        }}
      }}
    }}
  }}
}}"""


def _connection(alias: str, filter_by: str = "") -> str:
    return (
        f"    {alias}: issues(\n"
        f"{filter_by}"
        "      orderBy: {field: CREATED_AT, direction: DESC},\n"
        f"      first: {ISSUE_PAGE_SIZE}\n"
        "    ) {\n"
        "      ...issueFields\n"
        "    }\n"
    )


def build_issue_query(
    owner: str,
    repository: str,
    repo_a11y_label_names: Sequence[str],
) -> Dict[str, str]:
    """Build the GraphQL request body for the combined issue query.

    The query asks for the most recently created issues (alias ``issues``) and,
    when an accessibility label set is given, the most recently created issues
    carrying any of those labels (alias ``a11yIssues``). Each connection is
    capped at ``ISSUE_PAGE_SIZE`` nodes.

    String arguments are JSON encoded, which is also valid GraphQL string
    literal syntax.

    Returns:
        A ``{"query": ...}`` body ready to be posted to the GraphQL endpoint.
    """
    label_names = [name for name in repo_a11y_label_names if name]

    connections = ""
    if label_names:
        filter_by = f"      filterBy: {{labels: {json.dumps(label_names)}}},\n"
        connections += _connection("a11yIssues", filter_by)
    connections += _connection("issues")

    query = (
        "query {\n"
        f"  repository(owner: {json.dumps(owner)}, name: {json.dumps(repository)}) {{\n"
        f"{connections}"
        "  }\n"
        "}\n"
        f"{ISSUE_FIELDS_FRAGMENT}"
    )
    return {"query": query}
