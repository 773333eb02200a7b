"""
Quote Service — prices requests and records submitted quotes.
Coordinates the calculator, the clock and both stores.
"""

from __future__ import annotations

import logging

from fukuro_quote.models.schemas import QuoteBreakdown, QuoteRequest, RateSchedule, StoredQuote
from fukuro_quote.persistence.project_repository import ProjectStore
from fukuro_quote.persistence.quote_repository import QuoteStore
from fukuro_quote.pricing.quote_calculator import Clock, compute_quote
from fukuro_quote.services.summary_service import render_receipt

logger = logging.getLogger(__name__)


class QuoteService:
    def __init__(
        self,
        quotes: QuoteStore,
        projects: ProjectStore,
        schedule: RateSchedule,
        clock: Clock,
        currency: str = "MXN",
    ):
        self.quotes = quotes
        self.projects = projects
        self.schedule = schedule
        self.clock = clock
        self.currency = currency

    def estimate(self, request: QuoteRequest) -> QuoteBreakdown:
        """Price without persisting anything."""
        return compute_quote(request, self.schedule, self.clock.today())

    def receipt(self, request: QuoteRequest, breakdown: QuoteBreakdown) -> str:
        return render_receipt(request, breakdown, self.schedule, self.currency)

    def submit(
        self,
        request: QuoteRequest,
        breakdown: QuoteBreakdown | None = None,
    ) -> StoredQuote:
        """
        Persist a quote and count it against its project.
        A breakdown already computed (e.g. by a chat session) is stored as is.
        """
        if not request.project_name.strip():
            raise ValueError("Project name is required")

        breakdown = breakdown or self.estimate(request)
        stored = self.quotes.create_quote(request, breakdown)
        project = self.projects.record_quote(request.project_name)
        logger.info(
            f"Quote {stored.id} submitted for {project.name!r} "
            f"(total={breakdown.total:.2f}, quotes on project={project.quote_count})"
        )
        return stored
