"""Generation tracking so a superseded analysis cannot overwrite a newer one."""

from __future__ import annotations

import logging
import threading
from typing import Optional, TypeVar

from .config import validate_repository
from .models import AnalysisRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalysisSession:
    """Issues analysis requests and accepts only results of the latest one."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def new_request(self, owner: str, repository: str) -> AnalysisRequest:
        """Start a new analysis, superseding any request still in flight.

        Raises:
            ConfigurationError: If ``owner`` or ``repository`` is blank.
        """
        validate_repository(owner, repository)
        with self._lock:
            self._generation += 1
            generation = self._generation
        return AnalysisRequest(owner=owner.strip(), repository=repository.strip(), generation=generation)

    def is_current(self, request: AnalysisRequest) -> bool:
        with self._lock:
            return request.generation == self._generation

    def accept(self, request: AnalysisRequest, result: T) -> Optional[T]:
        """Return ``result`` if ``request`` is still current, otherwise drop it."""
        if self.is_current(request):
            return result

        logger.info(
            "Discarding stale analysis result",
            extra={
                "owner": request.owner,
                "repository": request.repository,
                "generation": request.generation,
                "current_generation": self.generation,
            },
        )
        return None
