"""
Intake session — the COLLECTING → READY → PRICED lifecycle of a chat quote.

Each turn merges a validated fragment into the accumulator and re-runs the
completeness checks. READY is reached once nothing is missing; PRICED is
terminal until reset().
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fukuro_quote.intake.reconciler import (
    duration_sufficiency,
    merge,
    missing_required_fields,
    to_quote_request,
)
from fukuro_quote.models.enums import ExtractionFailureKind, IntakeStatus, TurnRole
from fukuro_quote.models.schemas import QuoteBreakdown, QuoteRequest, RateSchedule
from fukuro_quote.models.state import ExtractionFailure, IntakeState, QuoteFragment
from fukuro_quote.pricing.quote_calculator import compute_quote

logger = logging.getLogger(__name__)

_FIELD_QUESTIONS = {
    "project_name": "What is the name of the project?",
    "brief": "Could you give me a short brief of what you need?",
}


class IntakeSessionError(Exception):
    """Raised when an operation is not allowed in the session's current status."""


class IntakeSession:
    def __init__(self, state: Optional[IntakeState] = None):
        self.state = state or IntakeState()
        self._refresh_checks()

    # ── Accessors ────────────────────────────────────────

    @property
    def session_id(self) -> str:
        return self.state.session_id

    @property
    def status(self) -> IntakeStatus:
        return self.state.status

    @property
    def data(self) -> QuoteFragment:
        return self.state.data

    @property
    def is_complete(self) -> bool:
        return not self.state.missing_fields and not self.state.duration_issues

    # ── Turns ────────────────────────────────────────────

    def add_user_turn(self, text: str) -> None:
        self.state.add_turn(TurnRole.USER, text)

    def add_assistant_turn(self, text: str) -> None:
        self.state.add_turn(TurnRole.ASSISTANT, text)

    def apply(self, fragment: QuoteFragment) -> IntakeStatus:
        """Merge one turn's fragment and re-check completeness."""
        if self.state.status == IntakeStatus.PRICED:
            raise IntakeSessionError(f"Session {self.session_id} is already priced; reset it first")

        self.state.data = merge(self.state.data, fragment)
        self.state.turn_count += 1
        self.state.last_failure = None
        self._refresh_checks()

        logger.info(
            f"[INTAKE] {self.session_id} turn {self.state.turn_count} → {self.state.status.value} "
            f"(missing={self.state.missing_fields}, duration_issues={len(self.state.duration_issues)})"
        )
        return self.state.status

    def record_failure(self, kind: ExtractionFailureKind, message: str = "") -> None:
        """Note a failed extraction; the accumulator is left untouched."""
        self.state.last_failure = ExtractionFailure(kind=kind, message=message)
        logger.warning(f"[INTAKE] {self.session_id} extraction failed ({kind.value}): {message}")

    def _refresh_checks(self) -> None:
        self.state.missing_fields = sorted(missing_required_fields(self.state.data))
        self.state.duration_issues = duration_sufficiency(self.state.data)
        if self.state.status == IntakeStatus.COLLECTING and self.is_complete:
            self.state.status = IntakeStatus.READY

    # ── Prompts ──────────────────────────────────────────

    def follow_up(self) -> str:
        """The next question to ask, or a confirmation once everything is known."""
        if self.state.status == IntakeStatus.PRICED:
            return "Your quote is ready."
        questions = [_FIELD_QUESTIONS[f] for f in self.state.missing_fields if f in _FIELD_QUESTIONS]
        questions.extend(f"{issue}." for issue in self.state.duration_issues)
        if not questions:
            return "I have everything I need. Shall I prepare your quote?"
        return " ".join(questions)

    # ── Pricing ──────────────────────────────────────────

    def price(self, schedule: RateSchedule, today: date) -> tuple[QuoteRequest, QuoteBreakdown]:
        """Freeze the accumulated data, compute the quote and close the session."""
        if self.state.status != IntakeStatus.READY:
            raise IntakeSessionError(
                f"Session {self.session_id} is {self.state.status.value}, not READY"
            )
        if not self.is_complete:
            raise IntakeSessionError(
                f"Session {self.session_id} still needs: "
                + ", ".join(self.state.missing_fields + self.state.duration_issues)
            )

        request = to_quote_request(self.state.data)
        breakdown = compute_quote(request, schedule, today)
        self.state.breakdown = breakdown
        self.state.status = IntakeStatus.PRICED
        logger.info(f"[INTAKE] {self.session_id} priced: total={breakdown.total:.2f}")
        return request, breakdown

    def reset(self) -> None:
        """Back to COLLECTING with an empty accumulator and history."""
        self.state = IntakeState(session_id=self.session_id)
        self._refresh_checks()
        logger.info(f"[INTAKE] {self.session_id} reset")
