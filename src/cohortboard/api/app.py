"""FastAPI application factory.

The api layer:
- Reads filter values, runs the pure dashboard view builder
- Returns payloads for the UI
- Forbidden: aggregation logic of its own
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from cohortboard.core.settings import Settings
from cohortboard.dashboard.store import DatasetStore
from cohortboard.models.domain import LoadedDataset
from cohortboard.sources.base import ObservationSource

logger = logging.getLogger(__name__)


def get_dataset(request: Request) -> LoadedDataset:
    """Dependency to get the loaded dataset.

    Runs the initial load on first use. Waits for a load cycle that is
    already in progress, so status and rows always come from one cycle.

    Raises:
        HTTPException: 502 if the dataset failed to load.
    """
    store: DatasetStore = request.app.state.store
    dataset = store.dataset()
    if dataset.status == "error":
        raise HTTPException(status_code=502, detail=f"Error: {dataset.error}")
    return dataset


def get_settings(request: Request) -> Settings:
    """Dependency to get application settings."""
    return request.app.state.settings


def create_app(
    source: ObservationSource | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        source: Optional observation source. Defaults to the configured one.
        settings: Optional settings. Defaults to Settings.from_env().

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings.from_env()
    if source is None:
        source = settings.build_source()

    app = FastAPI(
        title="Cohortboard API",
        description="Weekly launch-cohort hit rates for ad creatives",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.store = DatasetStore(source)
    logger.info(f"Serving observations from {type(source).__name__}")

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",  # Vite dev server
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from cohortboard.api.routes import cohorts, dataset

    app.include_router(cohorts.router, prefix="/api")
    app.include_router(dataset.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
