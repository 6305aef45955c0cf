#!/usr/bin/env python3
"""Smoke test for the cohort dashboard.

Loads the configured dataset (demo by default, see COHORTBOARD_* env vars),
builds the unfiltered dashboard and checks its basic invariants.

Usage:
    python scripts/smoke_demo.py

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from cohortboard.core.settings import Settings  # noqa: E402
from cohortboard.dashboard.store import DatasetStore  # noqa: E402
from cohortboard.dashboard.view import build_dashboard_view  # noqa: E402
from cohortboard.models.domain import CohortQuery  # noqa: E402
from cohortboard.models.types import DashboardView  # noqa: E402


def check_rows_present(view: DashboardView) -> bool:
    """Check that at least one cohort row was produced."""
    if view.empty:
        print(f"FAIL: {view.message}")
        return False
    print(f"OK: {len(view.rows)} cohort rows")
    return True


def check_rows_sorted(view: DashboardView) -> bool:
    """Check that cohorts are ordered most recent first."""
    weeks = [r.cohort_week for r in view.rows]
    if weeks != sorted(weeks, reverse=True):
        print("FAIL: Cohorts are not sorted by cohort week descending")
        return False
    print("OK: Cohorts sorted most recent first")
    return True


def check_percentages(view: DashboardView) -> bool:
    """Check percentages are in range and never drop once weeks have closed."""
    ok = True
    for row in view.rows:
        pcts = [row.week1, row.week2, row.week3, row.week4]
        if any(p < 0 or p > 100 for p in pcts):
            print(f"FAIL: {row.cohort_week} has out-of-range percentages {pcts}")
            ok = False
        if all(p > 0 for p in pcts) and pcts != sorted(pcts):
            print(f"FAIL: {row.cohort_week} percentages decrease {pcts}")
            ok = False
        if row.hits > row.total_assets:
            print(f"FAIL: {row.cohort_week} hits {row.hits} > assets {row.total_assets}")
            ok = False
    if ok:
        print("OK: Percentages in range and monotonic")
    return ok


def print_table(view: DashboardView) -> None:
    """Print the cohort table and cards."""
    print(f"\n{'Cohort':<12}{'Assets':>8}{'Hits':>6}{'W1':>8}{'W2':>8}{'W3':>8}{'W4':>8}")
    for row in view.rows:
        print(
            f"{row.date:<12}{row.total_assets:>8}{row.hits:>6}"
            f"{row.week1:>7.1f}%{row.week2:>7.1f}%{row.week3:>7.1f}%{row.week4:>7.1f}%"
        )
    t = view.totals
    print(
        f"\nTotal assets: {t.total_assets}  Hits: {t.hits}  "
        f"Avg week 1: {t.week1:.1f}%  Avg week 4: {t.week4:.1f}% ({t.method})"
    )


def main() -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Cohortboard Smoke Test")
    print("=" * 60)

    settings = Settings.from_env()
    store = DatasetStore(settings.build_source())

    print("\n[1/4] Loading dataset...")
    if store.load() == "error":
        print(f"FAIL: Error: {store.error}")
        print("=" * 60)
        return 1
    print(f"OK: {len(store.observations())} observations loaded")

    view = build_dashboard_view(
        CohortQuery(observations=store.observations()),
        totals_method=settings.totals_method,
    )

    checks_passed = 1
    checks_failed = 0
    checks = [
        ("[2/4] Checking rows...", check_rows_present),
        ("[3/4] Checking order...", check_rows_sorted),
        ("[4/4] Checking percentages...", check_percentages),
    ]
    for label, check in checks:
        print(f"\n{label}")
        if check(view):
            checks_passed += 1
        else:
            checks_failed += 1

    print_table(view)

    # Summary
    print("\n" + "=" * 60)
    if checks_failed == 0:
        print(f"RESULT: ALL PASSED ({checks_passed} checks)")
        print("=" * 60)
        return 0
    else:
        print(f"RESULT: {checks_passed} passed, {checks_failed} failed")
        print("=" * 60)
        return 1


if __name__ == "__main__":
    sys.exit(main())
