"""Filter dropdown options derived from the raw rows."""

from __future__ import annotations

from collections.abc import Iterable

from cohortboard.models.domain import Observation
from cohortboard.selection.filters import ALL, FILTER_DIMENSIONS, FilterDimension


def distinct_values(observations: Iterable[Observation], field: str) -> list[str]:
    """Distinct non-empty values of a field, sorted, with ALL first."""
    values = {getattr(obs, field) for obs in observations if getattr(obs, field)}
    values.discard(ALL)
    return [ALL, *sorted(values)]


def filter_options(
    observations: Iterable[Observation],
    dimensions: Iterable[FilterDimension] = FILTER_DIMENSIONS,
) -> dict[str, list[str]]:
    """Dropdown options for every exact-match dimension.

    Substring dimensions take free-form tokens and have no option list.
    """
    observations = tuple(observations)
    return {
        dim.name: distinct_values(observations, dim.field)
        for dim in dimensions
        if dim.mode == "exact"
    }
