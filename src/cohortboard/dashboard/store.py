"""Dataset store owning the one-shot load cycle.

idle -> loading -> ready | error

The raw observations are an immutable tuple once loaded and are never
mutated. A failed load keeps no rows and is terminal until reload().

Every read goes through the same lock as the load cycle, so a caller that
arrives while a cycle is running waits for it and then sees the finished
result, never the rows of a previous cycle under a "loading" status.
"""

from __future__ import annotations

import logging
import threading

from cohortboard.models.domain import LoadedDataset, LoadStatus, Observation
from cohortboard.models.types import StoreStatus
from cohortboard.sources.base import FetchError, ObservationSource

logger = logging.getLogger(__name__)


class DatasetStore:
    """Holds the raw observation set for the dashboard."""

    def __init__(self, source: ObservationSource):
        self.source = source
        self.status: LoadStatus = "idle"
        self.error: str | None = None
        self.generated_at: str | None = None
        self._observations: tuple[Observation, ...] = ()
        self._lock = threading.Lock()

    def _fail(self, error: str) -> LoadStatus:
        self._observations = ()
        self.generated_at = None
        self.error = error
        self.status = "error"
        return self.status

    def _load_locked(self) -> LoadStatus:
        """Run one load cycle. Caller must hold the lock."""
        self.status = "loading"
        self.error = None
        try:
            payload = self.source.load()
            observations = payload.observations()
        except FetchError as e:
            logger.warning(f"Dataset load failed: {e}")
            return self._fail(str(e) or "Failed to load")
        except Exception as e:
            logger.exception(f"Unexpected error loading dataset: {e}")
            return self._fail(f"{type(e).__name__}: {e}")

        self._observations = observations
        self.generated_at = payload.generated_at
        self.status = "ready"
        logger.info(f"Dataset ready with {len(self._observations)} observations")
        return self.status

    def load(self) -> LoadStatus:
        """Run one load cycle against the source.

        Returns:
            Final status of the cycle ("ready" or "error").
        """
        with self._lock:
            return self._load_locked()

    def ensure_loaded(self) -> LoadStatus:
        """Load once if no cycle has run yet.

        Blocks while another cycle is in progress.
        """
        with self._lock:
            if self.status == "idle":
                return self._load_locked()
            return self.status

    def reload(self) -> LoadStatus:
        """Start a fresh load cycle."""
        return self.load()

    def dataset(self) -> LoadedDataset:
        """Load once if needed, then return status and rows of the same cycle."""
        with self._lock:
            if self.status == "idle":
                self._load_locked()
            return LoadedDataset(
                status=self.status,
                observations=self._observations,
                error=self.error,
            )

    def observations(self) -> tuple[Observation, ...]:
        """Loaded observations (empty unless ready)."""
        with self._lock:
            return self._observations

    def snapshot(self) -> StoreStatus:
        """Status payload for the API."""
        with self._lock:
            return StoreStatus(
                status=self.status,
                error=self.error,
                row_count=len(self._observations),
                generated_at=self.generated_at,
            )
