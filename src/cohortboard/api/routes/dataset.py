"""Dataset load-cycle endpoints.

GET /api/status - Current load status
POST /api/reload - Start a fresh one-shot load
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from cohortboard.dashboard.store import DatasetStore
from cohortboard.models.types import StoreStatus

router = APIRouter()


@router.get("/status", response_model=StoreStatus)
def get_status(request: Request) -> StoreStatus:
    """Get the dataset load status without triggering a load."""
    store: DatasetStore = request.app.state.store
    return store.snapshot()


@router.post("/reload", response_model=StoreStatus)
def reload_dataset(request: Request) -> StoreStatus:
    """Re-run the load cycle.

    A failed reload is reported in the payload, not as an HTTP error.
    """
    store: DatasetStore = request.app.state.store
    store.reload()
    return store.snapshot()
