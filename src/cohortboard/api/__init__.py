"""API module for cohortboard.

The api layer:
- Reads filter values, runs the pure dashboard view builder
- Returns payloads for the UI
"""
