"""Dashboard view assembly.

Pure function from a CohortQuery to the DashboardView payload:
select -> aggregate -> totals -> shape for the UI.
No state is kept between calls; every filter change rebuilds the view.
"""

from __future__ import annotations

from datetime import date

from cohortboard.aggregation.cohorts import (
    TotalsMethod,
    aggregate_cohorts,
    compute_totals,
    parse_cohort_week,
)
from cohortboard.models.domain import WEEK_OFFSETS, CohortQuery, CohortSummary, LoadStatus
from cohortboard.models.types import CohortRowView, DashboardView, TotalsView, Trend, WeekCell
from cohortboard.selection.filters import build_selection, select_observations
from cohortboard.selection.options import filter_options

# Target cumulative hit % per week, shown in the column headers
WEEK_TARGETS: dict[int, float] = {1: 10.0, 2: 20.0, 3: 25.0, 4: 25.0}

EMPTY_MESSAGE = "No cohort rows"


def format_cohort_date(cohort_week: str) -> str:
    """Short display date, e.g. "Oct 06, 25". Falls back to the raw value."""
    parsed = parse_cohort_week(cohort_week)
    if parsed is None:
        return cohort_week
    return f"{parsed:%b %d, %y}"


def trend(current: float, previous: float) -> Trend:
    """Compare two percentages at display precision."""
    current = round(current, 1)
    previous = round(previous, 1)
    if current > previous:
        return "up"
    if current < previous:
        return "down"
    return "neutral"


def build_row(summary: CohortSummary) -> CohortRowView:
    """Shape one cohort summary into a table row."""
    cells: list[WeekCell] = []
    previous = 0.0
    for k in WEEK_OFFSETS:
        value = summary.week_pct(k)
        cells.append(
            WeekCell(
                week=k,
                value=value,
                previous=previous,
                target=WEEK_TARGETS[k],
                trend=trend(value, previous),
            )
        )
        previous = value

    return CohortRowView(
        cohort_week=summary.cohort_week,
        date=format_cohort_date(summary.cohort_week),
        total_assets=summary.total_assets,
        hits=summary.hits,
        week1=summary.week1,
        week2=summary.week2,
        week3=summary.week3,
        week4=summary.week4,
        cells=cells,
    )


def build_dashboard_view(
    query: CohortQuery,
    today: date | None = None,
    totals_method: TotalsMethod = TotalsMethod.WEIGHTED,
    status: LoadStatus = "ready",
) -> DashboardView:
    """Build the full dashboard payload for a query.

    Args:
        query: Raw observations plus active filters.
        today: Evaluation date for week eligibility. Defaults to UTC today.
        totals_method: How week percentages roll up into the cards.
        status: Load status of the underlying dataset.

    Returns:
        DashboardView ready to serialize.

    Raises:
        UnknownFilterError: If the query names an undeclared filter.
    """
    selection = build_selection(query.filters)
    filtered = select_observations(query.observations, selection)
    summaries = aggregate_cohorts(filtered, today=today)
    totals = compute_totals(summaries, method=totals_method)

    rows = [build_row(s) for s in summaries]
    return DashboardView(
        status=status,
        filters=selection,
        rows=rows,
        totals=TotalsView(
            total_assets=totals.total_assets,
            hits=totals.hits,
            week1=totals.week1,
            week2=totals.week2,
            week3=totals.week3,
            week4=totals.week4,
            method=TotalsMethod(totals_method).value,
        ),
        empty=not rows,
        message=EMPTY_MESSAGE if not rows else None,
        filter_options=filter_options(query.observations),
    )
