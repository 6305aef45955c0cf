"""Tests for observation sources.

The HTTP source is tested against httpx.MockTransport; no network access.
"""

import json
from datetime import date

import httpx
import pytest

from cohortboard.sources import (
    DemoObservationSource,
    FetchError,
    FileObservationSource,
    HttpObservationSource,
    StaticObservationSource,
)

URL = "https://ads.example.com/api/ad-weeks"


def http_source(handler) -> HttpObservationSource:
    return HttpObservationSource(URL, timeout=5.0, transport=httpx.MockTransport(handler))


class TestHttpObservationSource:
    """Tests for HttpObservationSource."""

    def test_loads_payload(self, raw_rows):
        """A 200 response is parsed into the payload."""

        def handler(request):
            assert request.url.path == "/api/ad-weeks"
            return httpx.Response(
                200, json={"generated_at": "2025-10-20", "count": len(raw_rows), "rows": raw_rows}
            )

        payload = http_source(handler).load()
        assert payload.generated_at == "2025-10-20"
        assert len(payload.rows) == len(raw_rows)

    def test_non_success_raises(self):
        """A non-2xx response raises FetchError naming path and status."""
        source = http_source(lambda request: httpx.Response(503))
        with pytest.raises(FetchError, match="/api/ad-weeks 503"):
            source.load()

    def test_transport_error_raises(self):
        """Network errors become FetchError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError, match="connection refused"):
            http_source(handler).load()

    def test_invalid_json_raises(self):
        """A non-JSON body raises FetchError."""
        source = http_source(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(FetchError, match="invalid payload"):
            source.load()

    def test_single_request_no_retry(self):
        """Failure is terminal: exactly one request is made."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(FetchError):
            http_source(handler).load()
        assert len(calls) == 1


class TestStaticSources:
    """Tests for static and file sources."""

    def test_static_rows(self, raw_rows):
        """In-memory rows are served as a payload."""
        payload = StaticObservationSource(raw_rows, generated_at="now").load()
        assert payload.count == len(raw_rows)
        assert payload.generated_at == "now"

    def test_static_empty(self):
        """No rows gives an empty payload."""
        assert StaticObservationSource().load().rows == []

    def test_file_source(self, tmp_path, raw_rows):
        """A saved payload file is loaded."""
        path = tmp_path / "payload.json"
        path.write_text(json.dumps({"generated_at": "x", "count": 1, "rows": raw_rows}))
        payload = FileObservationSource(path).load()
        assert len(payload.rows) == len(raw_rows)

    def test_missing_file_raises(self, tmp_path):
        """A missing file raises FetchError on load."""
        with pytest.raises(FetchError):
            FileObservationSource(tmp_path / "missing.json").load()

    def test_bad_file_raises(self, tmp_path):
        """A non-JSON file raises FetchError on load."""
        path = tmp_path / "payload.json"
        path.write_text("not json")
        with pytest.raises(FetchError):
            FileObservationSource(path).load()


class TestDemoObservationSource:
    """Tests for the synthetic demo source."""

    def test_deterministic(self):
        """Same seed and anchor date produce identical rows."""
        a = DemoObservationSource(seed=7, today=date(2025, 10, 22)).load()
        b = DemoObservationSource(seed=7, today=date(2025, 10, 22)).load()
        assert a.rows == b.rows

    def test_different_seed_differs(self):
        """A different seed changes the rows."""
        a = DemoObservationSource(seed=7, today=date(2025, 10, 22)).load()
        b = DemoObservationSource(seed=8, today=date(2025, 10, 22)).load()
        assert a.rows != b.rows

    def test_cohorts_are_mondays(self):
        """Every cohort week is a Monday on or before the anchor date."""
        today = date(2025, 10, 22)
        payload = DemoObservationSource(cohorts=4, today=today).load()
        weeks = {date.fromisoformat(r.cohort_week) for r in payload.rows}
        assert weeks
        assert all(w.weekday() == 0 and w <= today for w in weeks)

    def test_no_rows_for_unstarted_weeks(self):
        """Rows exist only for weeks that have started."""
        today = date(2025, 10, 22)
        payload = DemoObservationSource(cohorts=6, today=today).load()
        for row in payload.rows:
            start = date.fromisoformat(row.cohort_week)
            assert (today - start).days >= 7 * (row.week_offset - 1)

    def test_hit_flag_is_cumulative(self):
        """Once an ad reports a hit, later rows for it report hits too."""
        payload = DemoObservationSource(cohorts=8, ads_per_cohort=30, today=date(2025, 10, 22)).load()
        first_hit: dict[str, int] = {}
        for row in sorted(payload.rows, key=lambda r: (r.ad_id, r.week_offset)):
            if row.ad_id in first_hit:
                assert row.hit_cum == 1
            elif row.hit_cum:
                first_hit[row.ad_id] = row.week_offset

    def test_count_matches_rows(self):
        """Generated payload count equals its row count."""
        payload = DemoObservationSource(cohorts=2, ads_per_cohort=5, today=date(2025, 10, 22)).load()
        assert payload.count == len(payload.rows)
