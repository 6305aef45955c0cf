"""cohortboard: weekly launch-cohort hit-rate dashboard for ad creatives."""

__version__ = "0.1.0"
