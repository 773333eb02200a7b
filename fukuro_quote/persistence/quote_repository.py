"""
Quote Store — submitted quotes, append-only.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from fukuro_quote.models.schemas import QuoteBreakdown, QuoteRequest, StoredQuote
from fukuro_quote.persistence.json_store import JsonFileStore

logger = logging.getLogger(__name__)


class QuoteStore:
    def __init__(self, data_dir: Path | str):
        self._file = JsonFileStore(Path(data_dir) / "quotes.json")

    def list_quotes(self) -> list[StoredQuote]:
        return [StoredQuote.model_validate(r) for r in self._file.read()]

    def list_for_project(self, project_name: str) -> list[StoredQuote]:
        """Quotes whose project name matches, ignoring case."""
        wanted = project_name.strip().lower()
        return [
            q for q in self.list_quotes()
            if q.request.project_name.strip().lower() == wanted
        ]

    def create_quote(self, request: QuoteRequest, breakdown: QuoteBreakdown) -> StoredQuote:
        """Persist a quote and return it with its id and submission time."""
        records = self._file.read()
        quote = StoredQuote(
            id=f"Q-{uuid.uuid4().hex[:8].upper()}",
            request=request,
            breakdown=breakdown,
        )
        records.append(quote.model_dump(mode="json"))
        self._file.write(records)
        logger.info(f"[STORE] Saved quote {quote.id} for project {request.project_name!r}")
        return quote
