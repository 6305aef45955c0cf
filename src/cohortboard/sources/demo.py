"""Demo observation source.

Generates a deterministic synthetic ad-weeks dataset so the dashboard can
run without the upstream endpoint. The same seed and anchor date always
produce the same rows.

The data exercises the interesting paths of the aggregation:
- recent cohorts whose later weeks have not closed yet
- sparse rows (a week row may be missing after the ad hit)
- ad names carrying editor/angle/strategist/type tags for substring filters
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import numpy as np

from cohortboard.models.domain import WEEK_OFFSETS
from cohortboard.models.types import AdWeeksPayload, ObservationRow
from cohortboard.sources.base import ObservationSource

DEMO_CAMPAIGNS = ["Prospecting - Broad", "Prospecting - LAL", "Retargeting"]
DEMO_EDITORS = ["ED-Maya", "ED-Tom", "ED-Lina"]
DEMO_ANGLES = ["ANG-Pain", "ANG-Social", "ANG-Offer"]
DEMO_STRATEGISTS = ["CS-Jo", "CS-Ari"]
DEMO_AD_TYPES = ["UGC", "Static", "Motion"]

# Probability an ad first hits in week 1..4 (remainder never hits)
HIT_WEEK_PROBS = [0.10, 0.08, 0.06, 0.04]
# Probability a week row is missing from the upstream export
MISSING_ROW_PROB = 0.15


def monday_of(day: date) -> date:
    """Monday of the ISO week containing day."""
    return day - timedelta(days=day.weekday())


class DemoObservationSource(ObservationSource):
    """Deterministic synthetic ad-weeks data."""

    def __init__(
        self,
        seed: int = 42,
        today: date | None = None,
        cohorts: int = 8,
        ads_per_cohort: int = 24,
    ):
        """Initialize demo source.

        Args:
            seed: Random seed for reproducible rows.
            today: Anchor date. Rows are only emitted for weeks started by then.
            cohorts: Number of weekly cohorts, ending with the current week.
            ads_per_cohort: Ads launched per cohort.
        """
        self.seed = seed
        self.today = today or datetime.now(timezone.utc).date()
        self.cohorts = cohorts
        self.ads_per_cohort = ads_per_cohort

    def _ad_name(self, rng: np.random.Generator, n: int) -> str:
        """Compose a tagged ad name, e.g. 'ED-Tom | ANG-Pain | CS-Jo | UGC | v3'."""
        tags = [
            rng.choice(DEMO_EDITORS),
            rng.choice(DEMO_ANGLES),
            rng.choice(DEMO_STRATEGISTS),
            rng.choice(DEMO_AD_TYPES),
        ]
        return " | ".join([*(str(t) for t in tags), f"v{n}"])

    def generate_rows(self) -> list[ObservationRow]:
        """Generate the synthetic rows."""
        rng = np.random.default_rng(self.seed)
        latest = monday_of(self.today)
        hit_probs = HIT_WEEK_PROBS + [1.0 - sum(HIT_WEEK_PROBS)]

        rows: list[ObservationRow] = []
        for c in range(self.cohorts):
            cohort = latest - timedelta(weeks=c)
            for n in range(self.ads_per_cohort):
                ad_id = f"{cohort:%Y%m%d}-{n:03d}"
                campaign_idx = int(rng.integers(len(DEMO_CAMPAIGNS)))
                ad_name = self._ad_name(rng, n)
                # 5 == never hits
                hit_week = int(rng.choice(5, p=hit_probs)) + 1

                for k in WEEK_OFFSETS:
                    if cohort + timedelta(days=7 * (k - 1)) > self.today:
                        break
                    if rng.random() < MISSING_ROW_PROB:
                        continue
                    spend = round(float(rng.gamma(2.0, 40.0)), 2)
                    purchases = int(rng.poisson(2.0 if k >= hit_week else 0.3))
                    rows.append(
                        ObservationRow(
                            ad_id=ad_id,
                            ad_name_at_launch=ad_name,
                            campaign_id=f"cmp-{campaign_idx + 1}",
                            campaign_name_at_launch=DEMO_CAMPAIGNS[campaign_idx],
                            cohort_week=cohort.isoformat(),
                            week_offset=k,
                            hit_cum=int(k >= hit_week),
                            purchases=purchases,
                            revenue=round(purchases * 45.0, 2),
                            spend=spend,
                        )
                    )
        return rows

    def load(self) -> AdWeeksPayload:
        """Return the generated payload."""
        rows = self.generate_rows()
        return AdWeeksPayload(
            generated_at=datetime.combine(self.today, datetime.min.time(), timezone.utc).isoformat(),
            count=len(rows),
            rows=rows,
        )
