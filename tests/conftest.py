"""Shared pytest fixtures for cohortboard tests."""

import pytest

from helpers import TODAY


@pytest.fixture
def today():
    """Fixed evaluation date."""
    return TODAY


@pytest.fixture
def raw_rows():
    """Wire-format rows across two campaigns and two mature cohorts.

    Cohort 2025-08-11: b1 hits in week 2, b2 never hits.
    Cohort 2025-08-04: a1 hits in week 1, a2 in week 3, a3 never.
    """
    rows = []
    specs = [
        # ad_id, ad_name, campaign, cohort, hit week (None = never)
        ("a1", "ED-Maya | ANG-Pain | UGC", "Prospecting", "2025-08-04", 1),
        ("a2", "ED-Tom | ANG-Pain | Static", "Prospecting", "2025-08-04", 3),
        ("a3", "ED-Maya | ANG-Offer | UGC", "Retargeting", "2025-08-04", None),
        ("b1", "ED-Tom | ANG-Social | UGC", "Prospecting", "2025-08-11", 2),
        ("b2", "ED-Maya | ANG-Pain | Motion", "Retargeting", "2025-08-11", None),
    ]
    for ad_id, ad_name, campaign, cohort, hit_week in specs:
        for k in (1, 2, 3, 4):
            rows.append(
                {
                    "ad_id": ad_id,
                    "ad_name_at_launch": ad_name,
                    "campaign_id": campaign.lower(),
                    "campaign_name_at_launch": campaign,
                    "cohort_week": cohort,
                    "week_offset": k,
                    "hit_cum": int(hit_week is not None and k >= hit_week),
                    "purchases": 1,
                    "revenue": 40.0,
                    "spend": 20.0,
                }
            )
    return rows
