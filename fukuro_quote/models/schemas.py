"""
Reusable data schemas for the quote engine and the project dashboard.
Value objects (RateSchedule, Duration, QuoteBreakdown) are immutable;
dashboard records are plain mutable models persisted as JSON.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import DeliverableType, ServiceKind, TurnRole


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Tariff ───────────────────────────────────────────────


class RateSchedule(BaseModel):
    """Studio tariff. Tier 1 is the first minute of a deliverable, tier 2 the rest."""

    model_config = ConfigDict(frozen=True)

    base_fee: float = Field(default=1200.0, ge=0)
    audio_tier1: float = Field(default=2400.0, ge=0)
    audio_tier2: float = Field(default=1200.0, ge=0)
    video_tier1: float = Field(default=5000.0, ge=0)
    video_tier2: float = Field(default=2500.0, ge=0)
    urgency_percent: float = Field(default=0.40, ge=0, le=1)
    urgency_window_days: int = Field(default=3, ge=0)

    @model_validator(mode="after")
    def _tier2_is_a_discount(self) -> "RateSchedule":
        if self.audio_tier2 >= self.audio_tier1:
            raise ValueError("audio_tier2 must be lower than audio_tier1")
        if self.video_tier2 >= self.video_tier1:
            raise ValueError("video_tier2 must be lower than video_tier1")
        return self

    def tiers_for(self, kind: ServiceKind) -> tuple[float, float]:
        if kind == ServiceKind.AUDIO:
            return self.audio_tier1, self.audio_tier2
        return self.video_tier1, self.video_tier2


# ── Durations ────────────────────────────────────────────


class Duration(BaseModel):
    """A (minutes, seconds) pair; seconds always below 60."""

    model_config = ConfigDict(frozen=True)

    minutes: int = Field(default=0, ge=0)
    seconds: int = Field(default=0, ge=0, lt=60)

    @classmethod
    def from_parts(cls, minutes: float = 0, seconds: float = 0) -> "Duration":
        """Build a normalized duration, carrying second overflow into minutes."""
        return cls.from_seconds(max(minutes, 0) * 60 + max(seconds, 0))

    @classmethod
    def from_seconds(cls, total_seconds: float) -> "Duration":
        total = int(round(max(total_seconds, 0)))
        return cls(minutes=total // 60, seconds=total % 60)

    @property
    def total_minutes(self) -> float:
        return self.minutes + self.seconds / 60

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    def is_zero(self) -> bool:
        return self.minutes == 0 and self.seconds == 0

    def __str__(self) -> str:
        return f"{self.minutes}m {self.seconds}s"


# ── Quote input ──────────────────────────────────────────


class ServiceRequest(BaseModel):
    """
    One requested service. `individual_durations` covers the first N items
    explicitly; the remaining `quantity - N` items use `per_item_duration`.
    """

    service_kind: ServiceKind
    quantity: int = Field(default=1, ge=1)
    per_item_duration: Duration = Field(default_factory=Duration)
    individual_durations: list[Duration] = Field(default_factory=list)
    format: str = ""
    resolution: str = ""

    @model_validator(mode="after")
    def _individual_durations_fit_quantity(self) -> "ServiceRequest":
        if len(self.individual_durations) > self.quantity:
            raise ValueError(
                f"{len(self.individual_durations)} individual durations "
                f"for only {self.quantity} items"
            )
        return self


class QuoteRequest(BaseModel):
    """A validated request, ready to be priced."""

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    project_name: str = ""
    is_existing_project: bool = False
    services: list[ServiceRequest] = Field(default_factory=list)
    delivery_date: Optional[date] = None
    brief: str = ""
    assets_link: Optional[str] = None

    @model_validator(mode="after")
    def _one_request_per_service(self) -> "QuoteRequest":
        kinds = [s.service_kind for s in self.services]
        if len(kinds) != len(set(kinds)):
            raise ValueError("Each service kind may appear only once per quote")
        return self

    def service(self, kind: ServiceKind) -> Optional[ServiceRequest]:
        return next((s for s in self.services if s.service_kind == kind), None)

    @property
    def has_audio(self) -> bool:
        return self.service(ServiceKind.AUDIO) is not None

    @property
    def has_video(self) -> bool:
        return self.service(ServiceKind.VIDEO) is not None


# ── Quote output ─────────────────────────────────────────


class QuoteBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    audio_fee: float = 0.0
    video_fee: float = 0.0
    base_fee: float = 0.0
    subtotal: float = 0.0
    urgency_fee: float = 0.0
    has_urgency: bool = False
    total: float = 0.0


class StoredQuote(BaseModel):
    """A submitted quote as persisted in the quotes file."""

    id: str
    submitted_at: datetime = Field(default_factory=_utcnow)
    request: QuoteRequest
    breakdown: QuoteBreakdown


# ── Conversation ─────────────────────────────────────────


class ChatTurn(BaseModel):
    role: TurnRole
    content: str


class ExtractedQuote(BaseModel):
    """
    Best-effort structured output of the extraction LLM.
    Untrusted: every field is optional and loosely typed; the reconciler
    validates each one before it reaches the accumulator.
    """

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    project_name: Optional[str] = None
    is_existing_project: Optional[bool] = None
    brief: Optional[str] = None
    delivery_date: Optional[str] = Field(default=None, description="ISO date YYYY-MM-DD")
    assets_link: Optional[str] = None

    audio_requested: Optional[bool] = None
    audio_quantity: Optional[int] = None
    audio_duration: Optional[str] = Field(default=None, description="Duration of each audio, e.g. '1:30'")
    audio_durations: Optional[list[str]] = Field(default=None, description="Individual durations, in order")
    audio_format: Optional[str] = None
    audio_resolution: Optional[str] = None

    video_requested: Optional[bool] = None
    video_quantity: Optional[int] = None
    video_duration: Optional[str] = Field(default=None, description="Duration of each video, e.g. '0:45'")
    video_durations: Optional[list[str]] = Field(default=None, description="Individual durations, in order")
    video_format: Optional[str] = None
    video_resolution: Optional[str] = None


# ── Project dashboard ────────────────────────────────────


class ProjectLink(BaseModel):
    title: str
    url: str
    added_at: datetime = Field(default_factory=_utcnow)


class ReviewComment(BaseModel):
    """A review note pinned to a point of a deliverable's timeline."""
    timestamp: float = Field(ge=0)  # seconds
    comment: str
    added_at: datetime = Field(default_factory=_utcnow)


class Deliverable(BaseModel):
    title: str
    type: DeliverableType = DeliverableType.LINK
    url: str = ""
    filename: Optional[str] = None
    notes: str = ""
    approved: bool = False
    comments: list[ReviewComment] = Field(default_factory=list)
    added_at: datetime = Field(default_factory=_utcnow)


class Project(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    name: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    quote_count: int = 0
    links: list[ProjectLink] = Field(default_factory=list)
    deliverables: list[Deliverable] = Field(default_factory=list)
