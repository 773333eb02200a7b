"""
Intake state — the accumulator that grows across chat turns.

Design rules:
  1. Every fragment field is optional; None means "not known yet".
  2. Fragments only ever hold values that passed validation.
  3. The session status never moves backward except through reset().
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from .enums import ExtractionFailureKind, IntakeStatus, TurnRole
from .schemas import ChatTurn, Duration, QuoteBreakdown


class QuoteFragment(BaseModel):
    """A partial QuoteRequest, flat so that merging stays shallow."""

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    project_name: Optional[str] = None
    is_existing_project: Optional[bool] = None
    brief: Optional[str] = None
    delivery_date: Optional[date] = None
    assets_link: Optional[str] = None

    audio_requested: Optional[bool] = None
    audio_quantity: Optional[int] = Field(default=None, ge=0)
    audio_duration: Optional[Duration] = None
    audio_durations: Optional[list[Duration]] = None
    audio_format: Optional[str] = None
    audio_resolution: Optional[str] = None

    video_requested: Optional[bool] = None
    video_quantity: Optional[int] = Field(default=None, ge=0)
    video_duration: Optional[Duration] = None
    video_durations: Optional[list[Duration]] = None
    video_format: Optional[str] = None
    video_resolution: Optional[str] = None


class ExtractionFailure(BaseModel):
    kind: ExtractionFailureKind
    message: str = ""
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class IntakeState(BaseModel):
    """Everything a chat intake session owns."""

    session_id: str = Field(default_factory=lambda: f"INT-{uuid.uuid4().hex[:8].upper()}")
    status: IntakeStatus = IntakeStatus.COLLECTING
    data: QuoteFragment = Field(default_factory=QuoteFragment)
    history: list[ChatTurn] = Field(default_factory=list)
    missing_fields: list[str] = Field(default_factory=list)
    duration_issues: list[str] = Field(default_factory=list)
    last_failure: Optional[ExtractionFailure] = None
    breakdown: Optional[QuoteBreakdown] = None
    turn_count: int = 0

    # ── Helper ───────────────────────────────────────────

    def add_turn(self, role: TurnRole, content: str) -> None:
        self.history.append(ChatTurn(role=role, content=content))
