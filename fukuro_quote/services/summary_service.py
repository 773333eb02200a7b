"""
Summary Service — renders a priced quote as a plain-text receipt.
"""

from __future__ import annotations

from fukuro_quote.models.enums import ServiceKind
from fukuro_quote.models.schemas import QuoteBreakdown, QuoteRequest, RateSchedule

_NA = "N/A"
_RULE = "-" * 48


def _money(amount: float, currency: str) -> str:
    return f"${amount:,.2f} {currency}"


def render_receipt(
    request: QuoteRequest,
    breakdown: QuoteBreakdown,
    schedule: RateSchedule | None = None,
    currency: str = "MXN",
) -> str:
    schedule = schedule or RateSchedule()
    fees = {ServiceKind.AUDIO: breakdown.audio_fee, ServiceKind.VIDEO: breakdown.video_fee}
    services = [s for s in request.services]

    lines = [
        f"CLIENT:   {request.client_name or _NA}",
        f"EMAIL:    {request.client_email or _NA}",
        f"PROJECT:  {request.project_name or _NA}",
        _RULE,
        "SERVICES: " + (" + ".join(s.service_kind.value.capitalize() for s in services) or _NA),
    ]

    for service in services:
        label = service.service_kind.value.capitalize()
        lines.append(f"  [{label} details]")
        lines.append(f"    Quantity:          {service.quantity}")
        lines.append(f"    Duration (each):   {service.per_item_duration}")
        if service.individual_durations:
            lines.append(
                "    Listed durations:  "
                + ", ".join(str(d) for d in service.individual_durations)
            )
        lines.append(f"    Specs:             {service.format or _NA} | {service.resolution or _NA}")
        lines.append(f"    {label} subtotal:    {_money(fees[service.service_kind], currency)}")

    lines.append(_RULE)
    if request.is_existing_project:
        lines.append(f"BASE FEE (project): {_money(0, currency)} (existing project)")
    elif services:
        lines.append(f"BASE FEE (project): {_money(breakdown.base_fee, currency)}")
        lines.append("  > The base fee is charged once per project and waived for later additions.")

    lines.append(f"DELIVERY DATE: {request.delivery_date.isoformat() if request.delivery_date else _NA}")
    if breakdown.has_urgency:
        lines.append(
            f"URGENCY FEE: +{_money(breakdown.urgency_fee, currency)} "
            f"({schedule.urgency_percent:.0%})"
        )

    lines.extend([
        f"TOTAL QUOTE: {_money(breakdown.total, currency)}",
        "  > Approximate quote; adjusted to the final duration and extra revisions.",
        _RULE,
        "BRIEF:",
        request.brief or _NA,
        _RULE,
        "Three review rounds are included. Further revisions are quoted separately.",
        "Full payment is due on delivery of the final files.",
    ])
    return "\n".join(lines)
