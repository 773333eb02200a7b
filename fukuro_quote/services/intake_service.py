"""
Intake Service — runs chat turns: extraction, merge, follow-up question.
Sessions live in memory for the lifetime of the process.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel

from fukuro_quote.intake.session import IntakeSession, IntakeSessionError
from fukuro_quote.models.enums import ExtractionFailureKind, IntakeStatus
from fukuro_quote.models.schemas import QuoteBreakdown, QuoteRequest, RateSchedule
from fukuro_quote.models.state import ExtractionFailure
from fukuro_quote.pricing.quote_calculator import Clock
from fukuro_quote.services.extraction_service import ExtractionError, ExtractionService

logger = logging.getLogger(__name__)

_FAILURE_REPLIES = {
    ExtractionFailureKind.AUTHORIZATION: (
        "The assistant is not available right now. "
        "Please use the quote form to enter your project details."
    ),
    ExtractionFailureKind.TRANSPORT: "Sorry, I could not reach the assistant. Please try again.",
    ExtractionFailureKind.MALFORMED: "Sorry, I did not quite get that. Could you rephrase it?",
}


class IntakeReply(BaseModel):
    session_id: str
    status: IntakeStatus
    reply: str
    missing_fields: list[str] = []
    duration_issues: list[str] = []
    failure: Optional[ExtractionFailure] = None


class IntakeService:
    def __init__(self, extractor: ExtractionService, clock: Clock, schedule: RateSchedule):
        self.extractor = extractor
        self.clock = clock
        self.schedule = schedule
        self._sessions: dict[str, IntakeSession] = {}

    def open_session(self) -> IntakeSession:
        session = IntakeSession()
        self._sessions[session.session_id] = session
        logger.info(f"[INTAKE] Opened session {session.session_id}")
        return session

    def get(self, session_id: str) -> IntakeSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise KeyError(f"Intake session {session_id} not found") from None

    def snapshot(self, session: IntakeSession, reply: str) -> IntakeReply:
        return IntakeReply(
            session_id=session.session_id,
            status=session.status,
            reply=reply,
            missing_fields=session.state.missing_fields,
            duration_issues=session.state.duration_issues,
            failure=session.state.last_failure,
        )

    def handle_message(self, session_id: str, text: str) -> IntakeReply:
        """
        One chat turn. An extraction failure learns nothing: the accumulator
        is untouched and the same question is offered again.
        """
        session = self.get(session_id)
        if session.status == IntakeStatus.PRICED:
            raise IntakeSessionError(f"Session {session_id} is already priced; reset it first")
        history = list(session.state.history)
        session.add_user_turn(text)

        try:
            fragment = self.extractor.extract(text, history, today=self.clock.today())
        except ExtractionError as exc:
            session.record_failure(exc.kind, str(exc))
            reply = _FAILURE_REPLIES[exc.kind]
            if exc.kind != ExtractionFailureKind.AUTHORIZATION:
                reply = f"{reply} {session.follow_up()}"
            session.add_assistant_turn(reply)
            return self.snapshot(session, reply)

        session.apply(fragment)
        reply = session.follow_up()
        session.add_assistant_turn(reply)
        return self.snapshot(session, reply)

    def price(self, session_id: str) -> tuple[QuoteRequest, QuoteBreakdown]:
        return self.get(session_id).price(self.schedule, self.clock.today())

    def reset(self, session_id: str) -> IntakeSession:
        session = self.get(session_id)
        session.reset()
        return session
