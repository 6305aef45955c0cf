"""Base observation source interface.

A source has one job: `load() -> AdWeeksPayload`.
Sources must NOT filter, aggregate or shape UI output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from cohortboard.models.types import AdWeeksPayload


class FetchError(RuntimeError):
    """Raised when the raw observation set cannot be loaded.

    Terminal for the load cycle: no retry, no partial data.
    """


class ObservationSource(ABC):
    """Abstract base class for raw observation sources."""

    @abstractmethod
    def load(self) -> AdWeeksPayload:
        """Load the full raw payload.

        Returns:
            AdWeeksPayload with all rows.

        Raises:
            FetchError: If the payload cannot be loaded.
        """
        pass
