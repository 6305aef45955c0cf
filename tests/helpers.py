"""Test helpers shared across test modules."""

import threading
from datetime import date

from cohortboard.models.domain import Observation
from cohortboard.models.types import AdWeeksPayload
from cohortboard.sources.base import ObservationSource

# Fixed evaluation date for eligibility (a Monday)
TODAY = date(2025, 10, 20)


def obs(
    ad_id: str,
    cohort_week: str,
    week_offset: int,
    hit: bool = False,
    ad_name: str = "",
    campaign_name: str = "",
) -> Observation:
    """Build an Observation with sensible defaults."""
    return Observation(
        ad_id=ad_id,
        cohort_week=cohort_week,
        week_offset=week_offset,
        hit_cum=hit,
        ad_name=ad_name or f"ad {ad_id}",
        campaign_id="cmp-1",
        campaign_name=campaign_name or "Campaign A",
    )


def bare(ad_id: str = "x", cohort_week: str = "2025-08-04", week_offset: int = 1) -> Observation:
    """Observation with every optional text field left empty."""
    return Observation(ad_id=ad_id, cohort_week=cohort_week, week_offset=week_offset, hit_cum=False)


class GatedSource(ObservationSource):
    """Source whose loads block until released.

    started is set when a gated load begins; release lets it finish.
    With gated off, loads return immediately.
    """

    def __init__(self, rows, gated: bool = True):
        self.rows = rows
        self.gated = gated
        self.calls = 0
        self.started = threading.Event()
        self.release = threading.Event()

    def load(self) -> AdWeeksPayload:
        self.calls += 1
        if self.gated:
            self.started.set()
            self.release.wait(5)
        return AdWeeksPayload(rows=self.rows)
