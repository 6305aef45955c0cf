"""Static observation sources: in-memory rows or a saved JSON payload."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cohortboard.models.types import AdWeeksPayload
from cohortboard.sources.base import FetchError, ObservationSource

logger = logging.getLogger(__name__)


class StaticObservationSource(ObservationSource):
    """Serve a fixed in-memory payload.

    The rows are validated once at construction.
    """

    def __init__(
        self,
        rows: Iterable[Mapping[str, Any]] = (),
        generated_at: str | None = None,
    ):
        """Initialize static source.

        Args:
            rows: Raw row records in the upstream wire format.
            generated_at: Optional informational timestamp.
        """
        rows = [dict(r) for r in rows]
        self._payload = AdWeeksPayload(
            generated_at=generated_at, count=len(rows), rows=rows
        )

    def load(self) -> AdWeeksPayload:
        """Return the fixed payload."""
        return self._payload


class FileObservationSource(ObservationSource):
    """Read a payload previously saved from the ad-weeks endpoint."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> AdWeeksPayload:
        """Read and validate the payload file.

        Raises:
            FetchError: If the file is missing or not a valid payload.
        """
        logger.info(f"Loading observations from {self.path}")
        try:
            data = json.loads(self.path.read_text())
            payload = AdWeeksPayload.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            raise FetchError(f"{self.path} could not be loaded: {e}") from e
        return payload
