"""Command-line argument parsing for the accessibility issue metrics tool."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for an accessibility issue analysis.

    Returns:
        Parsed CLI arguments containing owner, repository, optional relay URL,
        request timeout and output switches.
    """
    parser = argparse.ArgumentParser(
        prog="a11y-issue-metrics",
        description=(
            "Compare accessibility issues with all recent issues of a GitHub repository "
            "(resolution rate, comments, time to close, time to first comment)."
        ),
    )

    parser.add_argument(
        "--owner",
        required=True,
        help="GitHub user or organization that owns the repository.",
    )
    parser.add_argument(
        "--repository",
        required=True,
        help="GitHub repository name to analyze.",
    )
    parser.add_argument(
        "--relay-url",
        default=None,
        help="Base URL of a relay service that holds the GitHub token (optional).",
    )
    parser.add_argument(
        "--labels-only",
        action="store_true",
        help="Only list the repository's accessibility labels.",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=30,
        help="Per-request timeout in seconds (default: 30).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)
