"""Tests for row selection.

Invariants:
1. A row is kept only if it passes every active filter (AND)
2. ALL disables a dimension
3. Substring dimensions match tokens inside the ad name
4. Descriptors are validated at construction
"""

import pytest

from cohortboard.selection.filters import (
    ALL,
    FILTER_DIMENSIONS,
    FilterDimension,
    UnknownFilterError,
    build_selection,
    select_observations,
)
from helpers import bare, obs

ROWS = [
    obs("a1", "2025-08-04", 1, ad_name="ED-Maya | ANG-Pain | UGC", campaign_name="Prospecting"),
    obs("a2", "2025-08-04", 1, ad_name="ED-Tom | ANG-Pain | Static", campaign_name="Prospecting"),
    obs("a3", "2025-08-04", 1, ad_name="ED-Maya | ANG-Offer | UGC", campaign_name="Retargeting"),
    obs("a4", "2025-08-11", 1, ad_name="ED-Tom | ANG-Social | Motion", campaign_name="Retargeting"),
]


def ids(rows):
    return [r.ad_id for r in rows]


class TestSelectObservations:
    """Tests for select_observations."""

    def test_no_filters_returns_everything(self):
        """Empty selection keeps all rows."""
        assert ids(select_observations(ROWS, {})) == ["a1", "a2", "a3", "a4"]

    def test_all_sentinel_disables_filter(self):
        """ALL on every dimension keeps all rows."""
        selection = build_selection({})
        assert all(v == ALL for v in selection.values())
        assert len(select_observations(ROWS, selection)) == 4

    def test_exact_campaign_match(self):
        """Campaign filter is an exact match."""
        result = select_observations(ROWS, {"campaign": "Retargeting"})
        assert ids(result) == ["a3", "a4"]

    def test_exact_match_does_not_match_substring(self):
        """A partial campaign name matches nothing."""
        assert select_observations(ROWS, {"campaign": "Retarget"}) == []

    def test_exact_ad_match(self):
        """Ad filter matches the full ad name."""
        result = select_observations(ROWS, {"ad": "ED-Tom | ANG-Pain | Static"})
        assert ids(result) == ["a2"]

    def test_substring_editor_match(self):
        """Editor filter looks for the token inside the ad name."""
        result = select_observations(ROWS, {"editor": "ED-Maya"})
        assert ids(result) == ["a1", "a3"]

    def test_substring_ad_type_match(self):
        """Ad type filter looks for the token inside the ad name."""
        assert ids(select_observations(ROWS, {"ad_type": "UGC"})) == ["a1", "a3"]

    def test_conjunction_is_intersection(self):
        """Two filters together yield the intersection of each alone."""
        by_campaign = set(ids(select_observations(ROWS, {"campaign": "Prospecting"})))
        by_angle = set(ids(select_observations(ROWS, {"angle": "ANG-Pain"})))
        by_tom = set(ids(select_observations(ROWS, {"editor": "ED-Tom"})))
        by_maya = set(ids(select_observations(ROWS, {"editor": "ED-Maya"})))

        both = select_observations(ROWS, {"campaign": "Prospecting", "editor": "ED-Tom"})
        assert set(ids(both)) == by_campaign & by_tom == {"a2"}

        both = select_observations(ROWS, {"angle": "ANG-Pain", "editor": "ED-Maya"})
        assert set(ids(both)) == by_angle & by_maya == {"a1"}

    def test_no_match_returns_empty(self):
        """Unmatched values yield an empty selection, not an error."""
        assert select_observations(ROWS, {"campaign": "Nope"}) == []

    def test_empty_input_returns_empty(self):
        """No rows in, no rows out."""
        assert select_observations([], {"campaign": "Prospecting"}) == []

    def test_missing_text_field_does_not_match(self):
        """Absent text fields never match a real token."""
        row = bare()
        assert select_observations([row], {"editor": "ED-Maya"}) == []
        assert select_observations([row], {"campaign": "Prospecting"}) == []

    def test_does_not_mutate_input(self):
        """Input list is left untouched."""
        rows = list(ROWS)
        select_observations(rows, {"campaign": "Prospecting"})
        assert rows == ROWS


class TestFilterDimension:
    """Tests for FilterDimension descriptors."""

    def test_builtin_dimensions(self):
        """Built-in dimensions cover campaign, ad and the ad-name tags."""
        names = [d.name for d in FILTER_DIMENSIONS]
        assert names == ["campaign", "ad", "editor", "angle", "creative_strategist", "ad_type"]

    def test_builtin_dimensions_have_no_passthrough(self):
        """Every built-in dimension is a real predicate."""
        assert all(not d.passthrough for d in FILTER_DIMENSIONS)

    def test_unknown_field_rejected(self):
        """Unknown observation field raises at construction."""
        with pytest.raises(ValueError, match="field"):
            FilterDimension("bogus", "not_a_field")

    def test_unknown_mode_rejected(self):
        """Unknown match mode raises at construction."""
        with pytest.raises(ValueError, match="mode"):
            FilterDimension("campaign", "campaign_name", "regex")

    def test_passthrough_value_accepts_every_row(self):
        """Explicit passthrough values pass regardless of content."""
        dim = FilterDimension("ad_type", "ad_name", "substring", passthrough=frozenset({"Mixed"}))
        result = select_observations(ROWS, {"ad_type": "Mixed"}, dimensions=[dim])
        assert len(result) == 4


class TestBuildSelection:
    """Tests for build_selection."""

    def test_fills_missing_dimensions_with_all(self):
        """Every declared dimension is present."""
        selection = build_selection({"campaign": "Prospecting"})
        assert selection["campaign"] == "Prospecting"
        assert selection["editor"] == ALL
        assert set(selection) == {d.name for d in FILTER_DIMENSIONS}

    def test_none_means_all(self):
        """None values become ALL."""
        assert build_selection({"ad": None})["ad"] == ALL

    def test_unknown_dimension_rejected(self):
        """Unknown dimension names raise UnknownFilterError."""
        with pytest.raises(UnknownFilterError, match="region"):
            build_selection({"region": "EU"})

    def test_unknown_filter_error_is_value_error(self):
        """UnknownFilterError is a ValueError."""
        assert issubclass(UnknownFilterError, ValueError)
