"""
FastAPI dependency providers — stores, services and the dashboard token check.
Override any of these through `app.dependency_overrides` in tests.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from fukuro_quote.config import Settings, get_settings
from fukuro_quote.persistence.project_repository import ProjectStore
from fukuro_quote.persistence.quote_repository import QuoteStore
from fukuro_quote.pricing.quote_calculator import Clock, SystemClock
from fukuro_quote.services.extraction_service import ExtractionService
from fukuro_quote.services.intake_service import IntakeService
from fukuro_quote.services.project_service import ProjectService
from fukuro_quote.services.quote_service import QuoteService


def get_clock(settings: Settings = Depends(get_settings)) -> Clock:
    return SystemClock(settings.studio_timezone)


def get_quote_store(settings: Settings = Depends(get_settings)) -> QuoteStore:
    return QuoteStore(settings.data_dir)


def get_project_store(settings: Settings = Depends(get_settings)) -> ProjectStore:
    return ProjectStore(settings.data_dir)


def get_quote_service(
    settings: Settings = Depends(get_settings),
    quotes: QuoteStore = Depends(get_quote_store),
    projects: ProjectStore = Depends(get_project_store),
    clock: Clock = Depends(get_clock),
) -> QuoteService:
    return QuoteService(quotes, projects, settings.rate_schedule(), clock, settings.currency)


def get_project_service(projects: ProjectStore = Depends(get_project_store)) -> ProjectService:
    return ProjectService(projects)


@lru_cache()
def get_intake_service() -> IntakeService:
    """Process-wide: chat sessions are kept in memory."""
    settings = get_settings()
    return IntakeService(
        ExtractionService(),
        SystemClock(settings.studio_timezone),
        settings.rate_schedule(),
    )


def require_dashboard_token(
    x_dashboard_token: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Dashboard routes need the configured token; an empty token disables the check."""
    if settings.dashboard_token and x_dashboard_token != settings.dashboard_token:
        raise HTTPException(status_code=401, detail="Invalid or missing dashboard token")
