"""
app/main.py

FastAPI application factory and process-wide logging setup for the
metrics API.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.config import get_app_settings


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_app_settings().log_level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Build and validate the scoring model once before serving traffic."""
    from app.services.metrics_service import get_metrics_service

    service = get_metrics_service()
    logging.getLogger(__name__).info(
        "Scoring model %s loaded with weights %s",
        service.explanation.version,
        service.explanation.weights,
    )
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title=get_app_settings().title,
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import metrics_router

    application.include_router(metrics_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        from app.services.metrics_service import get_metrics_service

        return {
            "status": "ok",
            "scoring_model": get_metrics_service().explanation.version,
        }

    return application


app = create_app()
