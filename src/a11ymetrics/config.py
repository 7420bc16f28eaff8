"""Configuration parsing and validation for the accessibility issue metrics tool."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import AuthenticationError, ConfigurationError

TOKEN_ENV_VAR = "AUTH_TOKEN"


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the command-line analysis."""

    owner: str
    repository: str
    token: Optional[str]
    relay_url: Optional[str] = None


@dataclass(frozen=True)
class RelayConfig:
    """Validated settings for the relay service."""

    token: str


def _read_token() -> str:
    return os.getenv(TOKEN_ENV_VAR, "").strip()


def validate_repository(owner: str, repository: str) -> None:
    """Reject blank owner or repository names before any request is made.

    Raises:
        ConfigurationError: If either value is empty or whitespace.
    """
    if not owner or not owner.strip() or not repository or not repository.strip():
        raise ConfigurationError("Please enter GitHub owner and repository name information.")


def load_config(owner: str, repository: str, relay_url: Optional[str] = None) -> Config:
    """Build and validate application configuration.

    Args:
        owner: GitHub user or organization owning the repository.
        repository: GitHub repository name.
        relay_url: Optional base URL of a relay service. When set, the issue
            query is sent through the relay and the local token is optional.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If ``owner`` or ``repository`` is blank.
        AuthenticationError: If ``AUTH_TOKEN`` is not configured and no relay is used.
    """
    validate_repository(owner, repository)

    token = _read_token()
    if not token and not relay_url:
        raise AuthenticationError(
            "Missing required GitHub token. "
            f"Set the '{TOKEN_ENV_VAR}' environment variable or pass --relay-url."
        )

    return Config(
        owner=owner.strip(),
        repository=repository.strip(),
        token=token or None,
        relay_url=relay_url.rstrip("/") if relay_url else None,
    )


def load_relay_config() -> RelayConfig:
    """Read the relay credential from the process environment.

    Raises:
        AuthenticationError: If ``AUTH_TOKEN`` is not configured.
    """
    token = _read_token()
    if not token:
        raise AuthenticationError(
            f"Missing required GitHub token. Set the '{TOKEN_ENV_VAR}' environment variable "
            "before starting the relay."
        )
    return RelayConfig(token=token)
