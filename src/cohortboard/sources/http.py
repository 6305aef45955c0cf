"""HTTP observation source.

One-shot GET against the ad-weeks endpoint. No retry, no backoff: any
failure is raised as FetchError and ends the load cycle.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from cohortboard.models.types import AdWeeksPayload
from cohortboard.sources.base import FetchError, ObservationSource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


class HttpObservationSource(ObservationSource):
    """Fetch the ad-weeks payload from an HTTP endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize HTTP source.

        Args:
            url: Full URL of the ad-weeks endpoint.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.url = url
        self.timeout = timeout
        self.transport = transport

    def _label(self) -> str:
        """Short label for error messages (endpoint path)."""
        return httpx.URL(self.url).path or self.url

    def load(self) -> AdWeeksPayload:
        """Fetch and validate the payload.

        Returns:
            Parsed AdWeeksPayload.

        Raises:
            FetchError: On transport errors, non-2xx responses or bad bodies.
        """
        logger.info(f"Fetching observations from {self.url}")

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(self.url)
        except httpx.HTTPError as e:
            logger.warning(f"Observation fetch failed: {e}")
            raise FetchError(f"{self._label()} {e}") from e

        if not response.is_success:
            logger.warning(f"Observation fetch returned {response.status_code}")
            raise FetchError(f"{self._label()} {response.status_code}")

        try:
            payload = AdWeeksPayload.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise FetchError(f"{self._label()} returned an invalid payload: {e}") from e

        logger.info(
            f"Loaded {len(payload.rows)} rows (count={payload.count}, generated_at={payload.generated_at})"
        )
        return payload
