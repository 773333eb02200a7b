"""
Extraction Service — turns a client's free-text message into a validated
QuoteFragment using the LLM.

The LLM output is untrusted: it is parsed into ExtractedQuote and then
sanitized field by field. Any failure of the call itself is reported as an
ExtractionError with a kind the caller can act on (retry, re-enter by hand).
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Sequence

import groq
from langchain_core.exceptions import OutputParserException
from pydantic import ValidationError

from fukuro_quote.intake.reconciler import sanitize_fragment
from fukuro_quote.models.enums import ExtractionFailureKind
from fukuro_quote.models.schemas import ChatTurn, ExtractedQuote
from fukuro_quote.models.state import QuoteFragment
from fukuro_quote.services.llm_service import structured_call

logger = logging.getLogger(__name__)

_PROMPT_PATH = (
    Path(__file__).resolve().parent.parent / "prompts" / "extraction_prompt.txt"
)

# Older turns add little and cost tokens
_MAX_HISTORY_TURNS = 12


class ExtractionError(Exception):
    """The extraction call failed; nothing was learned this turn."""

    def __init__(self, kind: ExtractionFailureKind, message: str):
        super().__init__(message)
        self.kind = kind


def _classify(exc: Exception) -> ExtractionFailureKind:
    if isinstance(exc, (groq.AuthenticationError, groq.PermissionDeniedError)):
        return ExtractionFailureKind.AUTHORIZATION
    if isinstance(exc, ValueError) and "API_KEY" in str(exc):
        return ExtractionFailureKind.AUTHORIZATION
    if isinstance(exc, (ValidationError, OutputParserException, groq.UnprocessableEntityError)):
        return ExtractionFailureKind.MALFORMED
    return ExtractionFailureKind.TRANSPORT


def _format_history(history: Sequence[ChatTurn]) -> str:
    turns = list(history)[-_MAX_HISTORY_TURNS:]
    if not turns:
        return "(no previous messages)"
    return "\n".join(f"{t.role.value}: {t.content}" for t in turns)


class ExtractionService:
    """Free text → QuoteFragment through the LLM."""

    def __init__(self, prompt_path: Path = _PROMPT_PATH):
        self.template = prompt_path.read_text(encoding="utf-8")

    def build_prompt(self, message: str, history: Sequence[ChatTurn], today: date) -> str:
        return self.template.format(
            today=today.isoformat(),
            history=_format_history(history),
            message=message,
        )

    def extract(
        self,
        message: str,
        history: Sequence[ChatTurn],
        today: date,
    ) -> QuoteFragment:
        """Raises ExtractionError when the LLM call cannot produce a result."""
        prompt = self.build_prompt(message, history, today)

        try:
            result = structured_call(prompt, ExtractedQuote)
        except Exception as exc:
            kind = _classify(exc)
            logger.warning(f"[EXTRACT] LLM call failed ({kind.value}): {exc}")
            raise ExtractionError(kind, str(exc)) from exc

        if not isinstance(result, ExtractedQuote):
            raise ExtractionError(
                ExtractionFailureKind.MALFORMED,
                f"Unexpected extraction result type: {type(result).__name__}",
            )

        fragment = sanitize_fragment(result.model_dump())
        logger.debug(f"[EXTRACT] Fragment: {fragment.model_dump(exclude_none=True)}")
        return fragment
