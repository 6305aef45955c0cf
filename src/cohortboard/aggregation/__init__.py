"""Aggregation module for cohort summaries.

- Groups filtered observations into weekly launch cohorts
- Produces cumulative hit percentages and population totals
- Forbidden: I/O, filter logic, UI shaping
"""
