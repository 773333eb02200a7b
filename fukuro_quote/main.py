"""
Fukuro Studio Quotes — Main Entry Point

Price a quote request from a JSON file (CLI):
    python -m fukuro_quote request.json
    python -m fukuro_quote request.json --submit

Run as an API server (for the site):
    python -m fukuro_quote --serve
    # or: uvicorn fukuro_quote.api:app --reload --port 8000

Or import and run programmatically:
    from fukuro_quote.main import run
    receipt = run("path/to/request.json")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from fukuro_quote.config import get_settings
from fukuro_quote.models.schemas import QuoteRequest
from fukuro_quote.persistence.project_repository import ProjectStore
from fukuro_quote.persistence.quote_repository import QuoteStore
from fukuro_quote.pricing.quote_calculator import SystemClock
from fukuro_quote.services.quote_service import QuoteService
from fukuro_quote.utils.logger import setup_logging


def build_quote_service() -> QuoteService:
    settings = get_settings()
    return QuoteService(
        QuoteStore(settings.data_dir),
        ProjectStore(settings.data_dir),
        settings.rate_schedule(),
        SystemClock(settings.studio_timezone),
        settings.currency,
    )


def run(file_path: str, submit: bool = False) -> str:
    """Price the request in *file_path* and return the receipt."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    logger = logging.getLogger(__name__)

    request = QuoteRequest.model_validate(json.loads(Path(file_path).read_text(encoding="utf-8")))
    service = build_quote_service()

    if submit:
        stored = service.submit(request)
        breakdown = stored.breakdown
        logger.info(f"Submitted quote {stored.id}")
    else:
        breakdown = service.estimate(request)

    receipt = service.receipt(request, breakdown)
    print(receipt)
    return receipt


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("fukuro_quote.api:app", host=host, port=port, reload=settings.debug)
