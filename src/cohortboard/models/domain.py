"""Domain models for cohortboard.

Pure Python dataclasses representing domain values.
These models are independent of the wire format and are used throughout
the selection and aggregation layers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

# Weekly checkpoints tracked per cohort
WEEK_OFFSETS: tuple[int, ...] = (1, 2, 3, 4)


# ============================================================================
# Observation Domain
# ============================================================================


@dataclass(frozen=True)
class Observation:
    """One ad's recorded state at one week offset since cohort launch."""

    ad_id: str
    cohort_week: str
    week_offset: int
    hit_cum: bool
    ad_name: str = ""
    campaign_id: str = ""
    campaign_name: str = ""
    purchases: float = 0.0
    revenue: float = 0.0
    spend: float = 0.0


# Text fields that filter dimensions may match against
OBSERVATION_TEXT_FIELDS: frozenset[str] = frozenset(
    {"ad_id", "ad_name", "campaign_id", "campaign_name", "cohort_week"}
)


# ============================================================================
# Cohort Domain
# ============================================================================


@dataclass(frozen=True)
class CohortSummary:
    """Aggregated hit percentages for one launch cohort.

    Attributes:
        cohort_week: ISO date of the cohort's Monday.
        total_assets: Distinct ads in the cohort (never below 1).
        hits: Cumulative hit count at the latest eligible week.
        week1..week4: Cumulative hit percentage, 0 when not yet eligible.
    """

    cohort_week: str
    total_assets: int
    hits: int
    week1: float
    week2: float
    week3: float
    week4: float

    def week_pct(self, week: int) -> float:
        """Return the percentage for week offset 1..4."""
        return getattr(self, f"week{week}")


@dataclass(frozen=True)
class CohortTotals:
    """Population-wide totals across all cohorts in a selection."""

    total_assets: int = 0
    hits: int = 0
    week1: float = 0.0
    week2: float = 0.0
    week3: float = 0.0
    week4: float = 0.0


# ============================================================================
# Query Domain
# ============================================================================

LoadStatus = Literal["idle", "loading", "ready", "error"]


@dataclass(frozen=True)
class LoadedDataset:
    """Status and rows read together from one load cycle."""

    status: LoadStatus
    observations: tuple[Observation, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class CohortQuery:
    """Immutable input to the dashboard: raw rows plus active filters.

    The presentation layer owns the current query and rebuilds the view
    whenever either part changes. Filters are copied into a read-only
    mapping, so later changes to the caller's dict do not leak in.
    """

    observations: tuple[Observation, ...]
    filters: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "observations", tuple(self.observations))
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))
