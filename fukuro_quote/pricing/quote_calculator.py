"""
Quote calculator — composes service fees, the per-project base fee and the
urgency surcharge into a QuoteBreakdown.

The calculation is pure: `today` is always passed in. Services obtain it
from a Clock so tests can pin the date.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from fukuro_quote.models.enums import ServiceKind
from fukuro_quote.models.schemas import QuoteBreakdown, QuoteRequest, RateSchedule
from fukuro_quote.pricing.tiered_fee import aggregate_service_fee

logger = logging.getLogger(__name__)


class Clock(Protocol):
    def now(self) -> datetime: ...

    def today(self) -> date: ...


class SystemClock:
    """Wall clock in the studio's time zone."""

    def __init__(self, timezone_name: str = "America/Mexico_City"):
        self.tz = ZoneInfo(timezone_name)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Clock pinned to a given date (tests, re-pricing old quotes)."""

    def __init__(self, today: date):
        self._today = today

    def now(self) -> datetime:
        return datetime.combine(self._today, datetime.min.time())

    def today(self) -> date:
        return self._today


def is_urgent(delivery_date: date | None, today: date, window_days: int) -> bool:
    """True when delivery falls strictly before today + window_days."""
    if delivery_date is None:
        return False
    return delivery_date < today + timedelta(days=window_days)


def compute_quote(request: QuoteRequest, schedule: RateSchedule, today: date) -> QuoteBreakdown:
    """Price a validated request against a tariff."""
    fees: dict[ServiceKind, float] = {}
    for kind in ServiceKind:
        service = request.service(kind)
        if service is None:
            fees[kind] = 0.0
            continue
        tier1, tier2 = schedule.tiers_for(kind)
        fees[kind] = aggregate_service_fee(service, tier1, tier2)

    any_service = request.has_audio or request.has_video
    base_fee = schedule.base_fee if any_service and not request.is_existing_project else 0.0

    subtotal = base_fee + fees[ServiceKind.AUDIO] + fees[ServiceKind.VIDEO]
    has_urgency = subtotal > 0 and is_urgent(
        request.delivery_date, today, schedule.urgency_window_days
    )
    urgency_fee = subtotal * schedule.urgency_percent if has_urgency else 0.0

    breakdown = QuoteBreakdown(
        audio_fee=fees[ServiceKind.AUDIO],
        video_fee=fees[ServiceKind.VIDEO],
        base_fee=base_fee,
        subtotal=subtotal,
        urgency_fee=urgency_fee,
        has_urgency=has_urgency,
        total=subtotal + urgency_fee,
    )
    logger.debug(f"[QUOTE] {request.project_name or '<unnamed>'}: {breakdown.model_dump()}")
    return breakdown
