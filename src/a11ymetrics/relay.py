"""Relay service that runs the combined issue query with a server-held token."""

from __future__ import annotations

import argparse
import logging
from typing import Any, List, Optional, Sequence

import uvicorn
from fastapi import FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import RelayConfig, load_relay_config
from .errors import ApiError
from .github_client import GitHubClient

logger = logging.getLogger(__name__)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def _json_response(content: Any, status_code: int) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _split_labels(raw: str) -> List[str]:
    return [name for name in raw.split(",") if name]


def create_app(
    config: Optional[RelayConfig] = None,
    client: Optional[GitHubClient] = None,
) -> FastAPI:
    """Create the relay application.

    Args:
        config: Relay settings. Read from the environment when omitted.
        client: GitHub client to forward queries with. Built from ``config``
            when omitted.

    Raises:
        AuthenticationError: If no token is configured.
    """
    if client is None:
        config = config or load_relay_config()
        client = GitHubClient(config)

    app = FastAPI(
        title="A11y Issue Metrics Relay",
        description="Forwards the accessibility issue query to GitHub GraphQL",
        version="0.1.0",
    )
    app.state.client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/github-api")
    def github_api(
        request: Request,
        owner: str = "",
        repository: str = "",
        a11y_labels: str = Query("", alias="a11yLabels"),
    ) -> JSONResponse:
        """Run the combined issue query and pass GitHub's JSON body through."""
        if not owner.strip() or not repository.strip():
            logger.warning("Rejected relay request without owner or repository")
            return _json_response(
                {"error": "Both 'owner' and 'repository' query parameters are required."},
                status.HTTP_400_BAD_REQUEST,
            )

        label_names = _split_labels(a11y_labels)
        logger.info(
            "Forwarding issue query",
            extra={"owner": owner, "repository": repository, "label_count": len(label_names)},
        )

        github: GitHubClient = request.app.state.client
        try:
            payload = github.fetch_issue_payload(owner, repository, label_names)
        except ApiError as exc:
            logger.error(
                "Upstream GitHub request failed",
                extra={"owner": owner, "repository": repository, "error": str(exc)},
            )
            return _json_response({"error": str(exc)}, status.HTTP_500_INTERNAL_SERVER_ERROR)

        return _json_response(payload, status.HTTP_200_OK)

    return app


def parse_relay_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="a11y-issue-metrics-relay",
        description="Serve the accessibility issue query relay (token read from AUTH_TOKEN).",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1).")
    parser.add_argument("--port", type=int, default=8888, help="Port to listen on (default: 8888).")
    return parser.parse_args(argv)


def serve(argv: Optional[Sequence[str]] = None) -> None:
    """Run the relay with uvicorn."""
    args = parse_relay_args(argv)
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    serve()
