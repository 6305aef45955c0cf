"""Cohort hit-rate aggregation.

Turns filtered ad-week observations into one CohortSummary per launch
week:

- total_assets: distinct ads seen anywhere in the cohort (floored at 1)
- weekN: % of assets that have hit by week N, 0 while week N is in the future
- hits: cumulative hit count at the latest eligible week

Hit sets are carried forward week to week, so an ad that hit in week 2 still
counts in weeks 3 and 4 when those rows are missing upstream.

Pure functions - no I/O, no state.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, timezone
from enum import Enum

import numpy as np

from cohortboard.models.domain import WEEK_OFFSETS, CohortSummary, CohortTotals, Observation

DAYS_PER_WEEK = 7


class TotalsMethod(str, Enum):
    """How per-cohort percentages roll up into population totals.

    WEIGHTED weights each cohort by its asset count. MEAN is the legacy
    unweighted average across cohorts, kept for comparison with the older
    dashboard cards.
    """

    WEIGHTED = "weighted"
    MEAN = "mean"


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def round_pct(count: int, total: int) -> float:
    """Percentage of count/total rounded half-up to one decimal place.

    Example: 1 of 3 -> 33.3
    """
    return math.floor(count / total * 1000 + 0.5) / 10


def parse_cohort_week(cohort_week: str) -> date | None:
    """Parse an ISO cohort date, returning None when it is not a date."""
    try:
        return date.fromisoformat(cohort_week[:10])
    except (TypeError, ValueError):
        return None


def week_eligibility(cohort_week: str, today: date) -> dict[int, bool]:
    """Which week offsets have closed as of today.

    Week k closes at cohort_week + 7k days. Each offset is checked on its
    own; an unparseable cohort date leaves every week ineligible.
    """
    start = parse_cohort_week(cohort_week)
    if start is None:
        return {k: False for k in WEEK_OFFSETS}
    return {
        k: start + timedelta(days=DAYS_PER_WEEK * k) <= today
        for k in WEEK_OFFSETS
    }


def cumulative_hit_sets(observations: Iterable[Observation]) -> dict[int, frozenset[str]]:
    """Build cumulative hit sets per week offset, carrying earlier hits forward.

    hit_set[k] = hit_set[k-1] | {ad_id with week_offset == k and hit_cum}
    """
    new_hits: dict[int, set[str]] = {k: set() for k in WEEK_OFFSETS}
    for obs in observations:
        if obs.hit_cum and obs.week_offset in new_hits:
            new_hits[obs.week_offset].add(obs.ad_id)

    sets: dict[int, frozenset[str]] = {}
    prev: frozenset[str] = frozenset()
    for k in WEEK_OFFSETS:
        prev = prev | new_hits[k]
        sets[k] = prev
    return sets


def summarize_cohort(
    cohort_week: str,
    observations: Sequence[Observation],
    today: date,
) -> CohortSummary:
    """Compute the summary for a single cohort group.

    Args:
        cohort_week: Cohort identifier (ISO Monday date).
        observations: All filtered observations of this cohort.
        today: Evaluation date for eligibility.

    Returns:
        CohortSummary for the group.
    """
    # Denominator = all unique ads in the cohort
    total_assets = len({obs.ad_id for obs in observations}) or 1

    eligible = week_eligibility(cohort_week, today)
    hit_sets = cumulative_hit_sets(observations)

    # Future weeks count as 0, not extrapolated
    counts = {k: len(hit_sets[k]) if eligible[k] else 0 for k in WEEK_OFFSETS}
    pcts = {k: round_pct(counts[k], total_assets) for k in WEEK_OFFSETS}

    latest = [k for k in WEEK_OFFSETS if eligible[k]]
    hits = counts[max(latest)] if latest else 0

    return CohortSummary(
        cohort_week=cohort_week,
        total_assets=total_assets,
        hits=hits,
        week1=pcts[1],
        week2=pcts[2],
        week3=pcts[3],
        week4=pcts[4],
    )


def aggregate_cohorts(
    observations: Iterable[Observation],
    today: date | None = None,
) -> list[CohortSummary]:
    """Group filtered observations by cohort and summarize each group.

    Args:
        observations: Filtered observations.
        today: Evaluation date. Defaults to the current UTC date.

    Returns:
        Cohort summaries, most recent cohort first.
    """
    if today is None:
        today = utc_today()

    by_cohort: dict[str, list[Observation]] = {}
    for obs in observations:
        if obs.cohort_week not in by_cohort:
            by_cohort[obs.cohort_week] = []
        by_cohort[obs.cohort_week].append(obs)

    summaries = [
        summarize_cohort(cohort_week, group, today)
        for cohort_week, group in by_cohort.items()
    ]
    # ISO dates sort lexicographically in calendar order
    summaries.sort(key=lambda s: s.cohort_week, reverse=True)
    return summaries


def compute_totals(
    summaries: Sequence[CohortSummary],
    method: TotalsMethod = TotalsMethod.WEIGHTED,
) -> CohortTotals:
    """Reduce cohort summaries into population-wide totals.

    total_assets and hits are plain sums. Week percentages are averaged
    across cohorts, weighted by total_assets unless the legacy MEAN method
    is requested.

    Args:
        summaries: Cohort summaries.
        method: Averaging method for week percentages.

    Returns:
        CohortTotals, all zero for an empty input.
    """
    if not summaries:
        return CohortTotals()

    method = TotalsMethod(method)
    assets = np.array([s.total_assets for s in summaries], dtype=float)
    weights = assets if method is TotalsMethod.WEIGHTED else np.ones_like(assets)

    weeks: dict[int, float] = {}
    for k in WEEK_OFFSETS:
        pcts = np.array([s.week_pct(k) for s in summaries], dtype=float)
        denominator = weights.sum()
        weeks[k] = float((pcts * weights).sum() / denominator) if denominator > 0 else 0.0

    return CohortTotals(
        total_assets=int(sum(s.total_assets for s in summaries)),
        hits=int(sum(s.hits for s in summaries)),
        week1=weeks[1],
        week2=weeks[2],
        week3=weeks[3],
        week4=weeks[4],
    )
