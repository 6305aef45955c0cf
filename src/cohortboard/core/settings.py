"""Environment-driven settings.

COHORTBOARD_SOURCE_URL     ad-weeks endpoint (HTTP source)
COHORTBOARD_SOURCE_FILE    saved payload JSON (file source)
COHORTBOARD_DEMO           "1" to force the synthetic demo dataset
COHORTBOARD_FETCH_TIMEOUT  fetch timeout in seconds (default 30)
COHORTBOARD_TOTALS_METHOD  "weighted" (default) or legacy "mean"

Source precedence: demo flag, URL, file, then demo as the fallback.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from cohortboard.aggregation.cohorts import TotalsMethod
from cohortboard.sources.base import ObservationSource
from cohortboard.sources.demo import DemoObservationSource
from cohortboard.sources.http import DEFAULT_TIMEOUT_S, HttpObservationSource
from cohortboard.sources.static import FileObservationSource

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    source_url: str | None = None
    source_file: Path | None = None
    demo: bool = False
    fetch_timeout: float = DEFAULT_TIMEOUT_S
    totals_method: TotalsMethod = TotalsMethod.WEIGHTED

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from the environment.

        Raises:
            ValueError: If the timeout or totals method is invalid.
        """
        timeout_raw = os.environ.get("COHORTBOARD_FETCH_TIMEOUT", str(DEFAULT_TIMEOUT_S))
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise ValueError(f"COHORTBOARD_FETCH_TIMEOUT must be a number, got {timeout_raw!r}") from e
        if timeout <= 0:
            raise ValueError(f"COHORTBOARD_FETCH_TIMEOUT must be positive, got {timeout}")

        method_raw = os.environ.get("COHORTBOARD_TOTALS_METHOD", TotalsMethod.WEIGHTED.value)
        try:
            method = TotalsMethod(method_raw.lower())
        except ValueError as e:
            raise ValueError(
                f"COHORTBOARD_TOTALS_METHOD must be 'weighted' or 'mean', got {method_raw!r}"
            ) from e

        source_file = os.environ.get("COHORTBOARD_SOURCE_FILE")
        return cls(
            source_url=os.environ.get("COHORTBOARD_SOURCE_URL") or None,
            source_file=Path(source_file) if source_file else None,
            demo=os.environ.get("COHORTBOARD_DEMO", "").lower() in TRUTHY,
            fetch_timeout=timeout,
            totals_method=method,
        )

    def build_source(self) -> ObservationSource:
        """Create the configured observation source.

        With nothing configured, the demo dataset is served.
        """
        if self.demo:
            return DemoObservationSource()
        if self.source_url:
            return HttpObservationSource(self.source_url, timeout=self.fetch_timeout)
        if self.source_file is not None:
            return FileObservationSource(self.source_file)
        return DemoObservationSource()
