"""Services — extraction, intake, quotes, projects and receipts."""

from fukuro_quote.services.extraction_service import ExtractionError, ExtractionService
from fukuro_quote.services.intake_service import IntakeReply, IntakeService
from fukuro_quote.services.project_service import ProjectService
from fukuro_quote.services.quote_service import QuoteService
from fukuro_quote.services.summary_service import render_receipt

__all__ = [
    "ExtractionError",
    "ExtractionService",
    "IntakeReply",
    "IntakeService",
    "ProjectService",
    "QuoteService",
    "render_receipt",
]
