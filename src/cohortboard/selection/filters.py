"""Row selection by filter dimensions.

Filtering is a pure per-row predicate: a row is kept when it satisfies
every active filter (logical AND). Dimensions are declared up front as
FilterDimension descriptors and validated when constructed, so no field
lookup is resolved dynamically per row.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Literal

from cohortboard.models.domain import OBSERVATION_TEXT_FIELDS, Observation

# Sentinel value meaning "no filter" for any dimension
ALL = "All"

MatchMode = Literal["exact", "substring"]
MATCH_MODES: frozenset[str] = frozenset({"exact", "substring"})


class UnknownFilterError(ValueError):
    """Raised when a selection names a dimension that is not declared."""


@dataclass(frozen=True)
class FilterDimension:
    """Descriptor for one filter dimension.

    Attributes:
        name: Dimension name as exposed to the UI (e.g. "campaign").
        field: Observation text field the predicate reads.
        mode: "exact" for equality, "substring" for containment.
        passthrough: Literal values accepted for every row regardless of
            the field's content. Empty for all built-in dimensions.
    """

    name: str
    field: str
    mode: MatchMode = "exact"
    passthrough: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if self.field not in OBSERVATION_TEXT_FIELDS:
            raise ValueError(f"Unknown observation field for filter {self.name!r}: {self.field!r}")
        if self.mode not in MATCH_MODES:
            raise ValueError(f"Unknown match mode for filter {self.name!r}: {self.mode!r}")

    def matches(self, observation: Observation, value: str) -> bool:
        """Check one observation against this dimension's active value."""
        if value == ALL or value in self.passthrough:
            return True

        text = getattr(observation, self.field) or ""
        if self.mode == "exact":
            return text == value
        return value in text


# Built-in dimensions. Tag filters look for tokens embedded in the ad name.
FILTER_DIMENSIONS: tuple[FilterDimension, ...] = (
    FilterDimension("campaign", "campaign_name", "exact"),
    FilterDimension("ad", "ad_name", "exact"),
    FilterDimension("editor", "ad_name", "substring"),
    FilterDimension("angle", "ad_name", "substring"),
    FilterDimension("creative_strategist", "ad_name", "substring"),
    FilterDimension("ad_type", "ad_name", "substring"),
)


def build_selection(
    values: Mapping[str, str | None],
    dimensions: Iterable[FilterDimension] = FILTER_DIMENSIONS,
) -> dict[str, str]:
    """Build a complete selection from partial filter values.

    Every declared dimension is present in the result; missing or None
    values become ALL. Values are not checked against any option list.

    Args:
        values: Mapping of dimension name to filter value.
        dimensions: Declared dimensions.

    Returns:
        Dict of dimension name to active value.

    Raises:
        UnknownFilterError: If values names an undeclared dimension.
    """
    dimensions = tuple(dimensions)
    known = {d.name for d in dimensions}
    unknown = sorted(set(values) - known)
    if unknown:
        raise UnknownFilterError(f"Unknown filter dimension(s): {', '.join(unknown)}")

    selection: dict[str, str] = {}
    for dim in dimensions:
        value = values.get(dim.name)
        selection[dim.name] = ALL if value is None else value
    return selection


def select_observations(
    observations: Iterable[Observation],
    filters: Mapping[str, str],
    dimensions: Iterable[FilterDimension] = FILTER_DIMENSIONS,
) -> list[Observation]:
    """Return the observations satisfying every active filter.

    Args:
        observations: Raw observation set.
        filters: Active value per dimension name. Missing names mean ALL.
        dimensions: Declared dimensions.

    Returns:
        Filtered observations, in input order.
    """
    active = [
        (dim, filters[dim.name])
        for dim in dimensions
        if filters.get(dim.name, ALL) != ALL
    ]
    if not active:
        return list(observations)

    return [
        obs
        for obs in observations
        if all(dim.matches(obs, value) for dim, value in active)
    ]
