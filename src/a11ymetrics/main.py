"""Accessibility issue metrics for GitHub repositories."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .analyzer import analyze
from .classifier import classify_labels
from .cli import parse_args
from .config import load_config
from .errors import A11yMetricsError, ApiError, AuthenticationError, ConfigurationError
from .fetcher import fetch_issues
from .github_client import GitHubClient, RelayClient
from .session import AnalysisSession
from .stats import generate_report

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2
EXIT_AUTHENTICATION = 3
EXIT_API = 4


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )


def _fail(message: str, exit_code: int) -> int:
    logger.error(message)
    print(f"ERROR: {message}", file=sys.stderr)
    return exit_code


def orchestrate_analysis(
    argv: Optional[Sequence[str]] = None,
    session: Optional[AnalysisSession] = None,
) -> int:
    """Run label classification, issue fetch and analysis, then print a report.

    Returns:
        Process exit code: 0 on success, 2 for configuration errors, 3 for a
        missing token, 4 for GitHub or relay failures and 1 otherwise.
    """
    try:
        args = parse_args(argv)
        configure_logging(args.verbose)
        config = load_config(
            owner=args.owner,
            repository=args.repository,
            relay_url=args.relay_url,
        )

        session = session or AnalysisSession()
        request = session.new_request(config.owner, config.repository)
        client = GitHubClient(config=config, timeout_seconds=args.timeout)

        print(f"Fetching labels for repository '{request.owner}/{request.repository}'...")
        labels_result = client.list_labels(request.owner, request.repository)
        if not labels_result.ok:
            return _fail(f"Could not fetch labels: {labels_result.error}", EXIT_API)

        a11y_labels = classify_labels(labels_result.value or [])
        request = request.with_labels([label.name for label in a11y_labels])

        if args.labels_only:
            print(generate_report(request=request, labels=a11y_labels))
            return EXIT_OK

        source = (
            RelayClient(config.relay_url, timeout_seconds=args.timeout)
            if config.relay_url
            else client
        )
        print(f"Fetching the last 100 issues for repository '{request.owner}/{request.repository}'...")
        issues_result = fetch_issues(source, request)
        if not issues_result.ok or issues_result.value is None:
            return _fail(f"Could not fetch issues: {issues_result.error}", EXIT_API)

        result = session.accept(
            request,
            analyze(
                issues_result.value.issues,
                issues_result.value.a11y_issues,
                request.a11y_label_names,
            ),
        )
        if result is None:
            return _fail("Analysis was superseded by a newer request.", EXIT_UNEXPECTED)

        print(generate_report(request=request, labels=a11y_labels, result=result))
        return EXIT_OK
    except ConfigurationError as exc:
        return _fail(str(exc), EXIT_CONFIGURATION)
    except AuthenticationError as exc:
        return _fail(str(exc), EXIT_AUTHENTICATION)
    except ApiError as exc:
        return _fail(str(exc), EXIT_API)
    except A11yMetricsError as exc:
        return _fail(str(exc), EXIT_UNEXPECTED)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error")
        return _fail(f"Unexpected error: {exc}", EXIT_UNEXPECTED)


def main() -> None:
    raise SystemExit(orchestrate_analysis())


if __name__ == "__main__":
    main()
