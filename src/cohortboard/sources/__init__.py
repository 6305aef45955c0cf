"""Observation sources.

A source has a narrow interface: `load() -> AdWeeksPayload`.
"""

from cohortboard.sources.base import FetchError, ObservationSource
from cohortboard.sources.demo import DemoObservationSource
from cohortboard.sources.http import HttpObservationSource
from cohortboard.sources.static import FileObservationSource, StaticObservationSource

__all__ = [
    "DemoObservationSource",
    "FetchError",
    "FileObservationSource",
    "HttpObservationSource",
    "ObservationSource",
    "StaticObservationSource",
]
