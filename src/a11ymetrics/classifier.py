"""Keyword and label based accessibility classification."""

from __future__ import annotations

from typing import Collection, Iterable, List

from .models import Issue, Label

A11Y_KEYWORDS = (
    "a11y",
    "accessibility",
    "aria",
    "jaws",
    "nvda",
    "voiceover",
    "narrator",
    "talkback",
    "zoomtext",
    "screen reader",
    "screenreader",
    "assistive tech",
)


def contains_a11y_keyword(text: str) -> bool:
    """Return ``True`` when any accessibility keyword occurs in ``text``, ignoring case."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in A11Y_KEYWORDS)


def classify_labels(labels: Iterable[Label]) -> List[Label]:
    """Return the labels whose names mention an accessibility keyword, in input order."""
    return [label for label in labels if contains_a11y_keyword(label.name)]


def is_accessibility_issue(issue: Issue, repo_a11y_label_names: Collection[str]) -> bool:
    """Decide whether an issue is accessibility-related.

    An issue qualifies when one of its labels is in the repository's
    accessibility label set, or, failing that, when its title contains an
    accessibility keyword. This is broader than the label filter used to
    select the accessibility issue population and is only used for the
    "percent of recent issues" figure.
    """
    if any(name in repo_a11y_label_names for name in issue.labels):
        return True

    return contains_a11y_keyword(issue.title)
