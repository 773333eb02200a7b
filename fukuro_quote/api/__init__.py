"""
FastAPI application factory and API package.

Run with:
    uvicorn fukuro_quote.api:app --reload --port 8000

Or via main.py:
    python -m fukuro_quote --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fukuro_quote.config import get_settings
from fukuro_quote.api.routes import health_router, project_router, quote_router
from fukuro_quote.api.intake_routes import intake_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="Fukuro Studio Quote API",
        description="Quotes, chat intake and project dashboard for the studio site",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # The site is served from a separate origin
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(quote_router, prefix="/api/quotes", tags=["Quotes"])
    application.include_router(project_router, prefix="/api/projects", tags=["Projects"])
    application.include_router(intake_router, prefix="/api/intake", tags=["Intake"])

    logger.info(f"Created {settings.app_name} API (data dir: {settings.data_dir})")
    return application


# Module-level instance for `uvicorn fukuro_quote.api:app`
app = create_app()
