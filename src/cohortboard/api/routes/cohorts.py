"""Cohort dashboard endpoints.

GET /api/cohorts - Cohort table, cards and options for the active filters
GET /api/filters - Dropdown options per filter dimension
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from cohortboard.api.app import get_dataset, get_settings
from cohortboard.core.settings import Settings
from cohortboard.dashboard.view import build_dashboard_view
from cohortboard.models.domain import CohortQuery, LoadedDataset
from cohortboard.models.types import DashboardView, FilterOptions
from cohortboard.selection.filters import UnknownFilterError
from cohortboard.selection.options import filter_options

router = APIRouter()


@router.get("/cohorts", response_model=DashboardView)
def get_cohorts(
    request: Request,
    dataset: LoadedDataset = Depends(get_dataset),
    settings: Settings = Depends(get_settings),
) -> DashboardView:
    """Get the cohort dashboard for the active filters.

    Filters are passed as query parameters named after the filter
    dimensions (campaign, ad, editor, angle, creative_strategist, ad_type).
    Missing parameters mean "All".

    Args:
        request: Incoming request (filter query parameters).
        dataset: Loaded rows and status (injected).
        settings: Application settings (injected).

    Returns:
        DashboardView for the filtered population.

    Raises:
        HTTPException: 422 if an unknown filter dimension is passed.
    """
    query = CohortQuery(
        observations=dataset.observations,
        filters=dict(request.query_params),
    )
    try:
        return build_dashboard_view(
            query,
            totals_method=settings.totals_method,
            status=dataset.status,
        )
    except UnknownFilterError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.get("/filters", response_model=FilterOptions)
def get_filters(dataset: LoadedDataset = Depends(get_dataset)) -> FilterOptions:
    """Get dropdown options derived from the loaded rows."""
    return FilterOptions(options=filter_options(dataset.observations))
