"""
Chat intake API routes.

Routes:
  POST /api/intake/sessions                 → Open a chat session
  GET  /api/intake/sessions/{id}            → Full session state
  POST /api/intake/sessions/{id}/messages   → Send a client message
  POST /api/intake/sessions/{id}/quote      → Price a READY session (optionally submit)
  POST /api/intake/sessions/{id}/reset      → Start over
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from fukuro_quote.api.dependencies import get_intake_service, get_quote_service
from fukuro_quote.intake.session import IntakeSession, IntakeSessionError
from fukuro_quote.models.schemas import QuoteBreakdown, QuoteRequest, StoredQuote
from fukuro_quote.models.state import IntakeState
from fukuro_quote.persistence.json_store import StorageError
from fukuro_quote.services.intake_service import IntakeReply, IntakeService
from fukuro_quote.services.quote_service import QuoteService

logger = logging.getLogger(__name__)

intake_router = APIRouter()


# ── Request / response schemas ───────────────────────────

class MessageRequest(BaseModel):
    text: str


class PriceRequest(BaseModel):
    submit: bool = False


class IntakeQuoteResponse(BaseModel):
    session_id: str
    request: QuoteRequest
    breakdown: QuoteBreakdown
    receipt: str
    quote: Optional[StoredQuote] = None


def _session(service: IntakeService, session_id: str) -> IntakeSession:
    try:
        return service.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Intake session {session_id} not found")


# ── Sessions ─────────────────────────────────────────────

@intake_router.post("/sessions", response_model=IntakeReply)
def open_session(service: IntakeService = Depends(get_intake_service)):
    session = service.open_session()
    greeting = "Hi! Tell me about your project. " + session.follow_up()
    session.add_assistant_turn(greeting)
    return service.snapshot(session, greeting)


@intake_router.get("/sessions/{session_id}", response_model=IntakeState)
def get_session(session_id: str, service: IntakeService = Depends(get_intake_service)):
    return _session(service, session_id).state


@intake_router.post("/sessions/{session_id}/messages", response_model=IntakeReply)
def send_message(
    session_id: str,
    body: MessageRequest,
    service: IntakeService = Depends(get_intake_service),
):
    _session(service, session_id)
    if not body.text.strip():
        raise HTTPException(status_code=422, detail="Message text is required")
    try:
        return service.handle_message(session_id, body.text)
    except IntakeSessionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@intake_router.post("/sessions/{session_id}/quote", response_model=IntakeQuoteResponse)
def price_session(
    session_id: str,
    body: Optional[PriceRequest] = None,
    service: IntakeService = Depends(get_intake_service),
    quotes: QuoteService = Depends(get_quote_service),
):
    _session(service, session_id)
    try:
        request, breakdown = service.price(session_id)
    except IntakeSessionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    stored = None
    if body is not None and body.submit:
        try:
            stored = quotes.submit(request, breakdown)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except StorageError as e:
            logger.error(f"Error submitting chat quote {session_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    return IntakeQuoteResponse(
        session_id=session_id,
        request=request,
        breakdown=breakdown,
        receipt=quotes.receipt(request, breakdown),
        quote=stored,
    )


@intake_router.post("/sessions/{session_id}/reset", response_model=IntakeReply)
def reset_session(session_id: str, service: IntakeService = Depends(get_intake_service)):
    _session(service, session_id)
    session = service.reset(session_id)
    return service.snapshot(session, session.follow_up())
