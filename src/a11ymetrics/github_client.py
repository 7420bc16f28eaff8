"""GitHub REST/GraphQL and relay clients for accessibility metrics retrieval."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import requests

from .config import Config, RelayConfig, validate_repository
from .errors import ApiError
from .models import FetchResult, Label
from .query import build_issue_query

logger = logging.getLogger(__name__)


class GitHubClient:
    """Small, typed client for the GitHub label and issue APIs."""

    _API_URL = "https://api.github.com"
    _GRAPHQL_URL = "https://api.github.com/graphql"
    _LABEL_PAGE_SIZE = 100
    _REST_ACCEPT = "application/vnd.github.v3+json"

    def __init__(self, config: Union[Config, RelayConfig], timeout_seconds: int = 30) -> None:
        """Initialize a GitHub API client.

        Args:
            config: Validated runtime configuration. The token, when present,
                is sent with every request.
            timeout_seconds: Per-request timeout in seconds.
        """
        self._config = config
        self._timeout_seconds = timeout_seconds

        self._session = requests.Session()
        if config.token:
            self._session.headers.update({"Authorization": f"token {config.token}"})

    def _build_url(self, path: str) -> str:
        """Build a fully qualified REST API URL from a path."""
        return f"{self._API_URL}/{path.lstrip('/')}"

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute a REST GET request.

        Raises:
            ApiError: If the request fails, returns HTTP >= 400, or does not
                return valid JSON.
        """
        url = self._build_url(path)
        try:
            response = self._session.get(
                url,
                params=params,
                headers={"Accept": self._REST_ACCEPT},
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ApiError(f"GitHub request failed: GET {url}") from exc

        if response.status_code >= 400:
            raise ApiError(
                f"GitHub API request failed: GET {url} returned {response.status_code} - {response.text}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"GitHub API returned invalid JSON: GET {url}") from exc

    def _post_graphql(self, body: Dict[str, str]) -> Dict[str, Any]:
        """Post a GraphQL body and return the JSON response whatever its status.

        GraphQL and authentication errors arrive as JSON documents and are left
        for the caller to inspect.

        Raises:
            ApiError: If the request fails at the transport level or the body
                is not a JSON object.
        """
        try:
            response = self._session.post(
                self._GRAPHQL_URL,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ApiError(f"GitHub GraphQL request failed: POST {self._GRAPHQL_URL}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(
                f"GitHub GraphQL returned invalid JSON: POST {self._GRAPHQL_URL} "
                f"returned {response.status_code}"
            ) from exc

        if not isinstance(payload, dict):
            raise ApiError(f"GitHub GraphQL returned unexpected payload shape: POST {self._GRAPHQL_URL}")

        return payload

    def list_labels(self, owner: str, repository: str) -> FetchResult[List[Label]]:
        """List up to 100 labels of a repository.

        Failures are logged and reported through the result, so an empty list
        always means the repository has no labels.

        Raises:
            ConfigurationError: If ``owner`` or ``repository`` is blank.
        """
        validate_repository(owner, repository)

        try:
            payload = self._get_json(
                f"repos/{owner}/{repository}/labels",
                params={"per_page": self._LABEL_PAGE_SIZE},
            )
        except ApiError as exc:
            logger.warning(
                "Label fetch failed",
                extra={"owner": owner, "repository": repository, "error": str(exc)},
            )
            return FetchResult.failure(str(exc))

        if not isinstance(payload, list):
            logger.warning(
                "Label fetch returned unexpected payload shape",
                extra={"owner": owner, "repository": repository},
            )
            return FetchResult.failure(
                f"GitHub API returned unexpected label payload for {owner}/{repository}"
            )

        labels: List[Label] = []
        for item in payload:
            name = item.get("name") if isinstance(item, dict) else None
            if not name:
                continue
            labels.append(
                Label(
                    name=str(name),
                    color=str(item.get("color") or ""),
                    url=str(item.get("url") or ""),
                )
            )

        logger.debug(
            "Fetched labels",
            extra={"owner": owner, "repository": repository, "label_count": len(labels)},
        )
        return FetchResult.success(labels)

    def fetch_issue_payload(
        self,
        owner: str,
        repository: str,
        a11y_label_names: Sequence[str],
    ) -> Dict[str, Any]:
        """Run the combined issue query and return the raw GraphQL response.

        Raises:
            ConfigurationError: If ``owner`` or ``repository`` is blank.
            ApiError: On transport failure or a non-JSON response.
        """
        validate_repository(owner, repository)
        body = build_issue_query(owner, repository, a11y_label_names)
        return self._post_graphql(body)


class RelayClient:
    """Client for the relay service, which holds the GitHub token server-side."""

    _ISSUES_PATH = "github-api"

    def __init__(self, base_url: str, timeout_seconds: int = 30) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def fetch_issue_payload(
        self,
        owner: str,
        repository: str,
        a11y_label_names: Sequence[str],
    ) -> Dict[str, Any]:
        """Ask the relay to run the combined issue query.

        Raises:
            ConfigurationError: If ``owner`` or ``repository`` is blank.
            ApiError: On transport failure, a relay-side error, or a non-JSON response.
        """
        validate_repository(owner, repository)
        url = f"{self._base_url}/{self._ISSUES_PATH}"
        params = {
            "owner": owner,
            "repository": repository,
            "a11yLabels": ",".join(a11y_label_names),
        }

        try:
            response = self._session.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise ApiError(f"Relay request failed: GET {url}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(f"Relay returned invalid JSON: GET {url} returned {response.status_code}") from exc

        if response.status_code >= 400:
            detail = payload.get("error") if isinstance(payload, dict) else payload
            raise ApiError(f"Relay request failed: GET {url} returned {response.status_code} - {detail}")

        if not isinstance(payload, dict):
            raise ApiError(f"Relay returned unexpected payload shape: GET {url}")

        return payload
