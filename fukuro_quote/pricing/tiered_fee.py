"""
Tiered fees — graduated per-minute billing for a single deliverable and
per-service aggregation over several deliverables.
"""

from __future__ import annotations

from fukuro_quote.models.schemas import ServiceRequest

# Minutes billed at the tier-1 rate before the tier-2 discount starts.
TIER_BREAK_MINUTES = 1.0


def gradual_fee(total_minutes: float, tier1_rate: float, tier2_rate: float) -> float:
    """First minute at tier 1, everything beyond it at tier 2."""
    if total_minutes <= 0:
        return 0.0
    if total_minutes <= TIER_BREAK_MINUTES:
        return total_minutes * tier1_rate
    return TIER_BREAK_MINUTES * tier1_rate + (total_minutes - TIER_BREAK_MINUTES) * tier2_rate


def aggregate_service_fee(request: ServiceRequest, tier1_rate: float, tier2_rate: float) -> float:
    """
    Subtotal of one service. Each item is billed as its own graduated job:
    explicit durations first, then `per_item_duration` for the rest.
    Durations are never pooled before tiering.
    """
    fee = sum(
        gradual_fee(d.total_minutes, tier1_rate, tier2_rate)
        for d in request.individual_durations
    )
    remaining = request.quantity - len(request.individual_durations)
    if remaining > 0:
        fee += gradual_fee(request.per_item_duration.total_minutes, tier1_rate, tier2_rate) * remaining
    return max(fee, 0.0)
