"""
Intake reconciliation — merging partial quote data gathered across turns
and deciding whether it is complete enough to price.

Nothing in here rejects input: unknown or invalid values are treated as
"not known yet" and reported back as missing information.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Mapping, Optional

from fukuro_quote.models.enums import ServiceKind
from fukuro_quote.models.schemas import Duration, QuoteRequest, ServiceRequest
from fukuro_quote.models.state import QuoteFragment
from fukuro_quote.pricing.duration_parser import parse_duration

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_TRUE_WORDS = {"true", "yes", "si", "sí", "1"}
_FALSE_WORDS = {"false", "no", "0"}

_SERVICE_LABELS = {ServiceKind.AUDIO: "Audio", ServiceKind.VIDEO: "Video"}


# ── Merge ────────────────────────────────────────────────


def merge(previous: QuoteFragment, incoming: QuoteFragment) -> QuoteFragment:
    """Overlay incoming over previous; None in incoming never overwrites."""
    updates = {
        name: getattr(incoming, name)
        for name in QuoteFragment.model_fields
        if getattr(incoming, name) is not None
    }
    return previous.model_copy(update=updates)


# ── Completeness checks ──────────────────────────────────


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_required_fields(data: QuoteFragment) -> set[str]:
    """`brief` is always required; `project_name` only for new projects."""
    missing: set[str] = set()
    if _is_blank(data.brief):
        missing.add("brief")
    if not data.is_existing_project and _is_blank(data.project_name):
        missing.add("project_name")
    return missing


def requested_quantity(data: QuoteFragment, kind: ServiceKind) -> int:
    """
    Number of items asked for a service; 0 when the service is not requested.
    Without a stated quantity, listed durations give the count, and a bare
    request counts as one item.
    """
    prefix = kind.value
    requested: Optional[bool] = getattr(data, f"{prefix}_requested")
    quantity: Optional[int] = getattr(data, f"{prefix}_quantity")

    if requested is False:
        return 0
    if quantity is None:
        durations = getattr(data, f"{prefix}_durations") or []
        if durations:
            return len(durations)
        return 1 if requested else 0
    return quantity


def duration_sufficiency(data: QuoteFragment) -> list[str]:
    """Describe, per requested service, which durations are still unknown."""
    issues: list[str] = []
    for kind in ServiceKind:
        quantity = requested_quantity(data, kind)
        if quantity <= 0:
            continue

        label = _SERVICE_LABELS[kind]
        per_item: Optional[Duration] = getattr(data, f"{kind.value}_duration")
        individual: list[Duration] = getattr(data, f"{kind.value}_durations") or []
        has_per_item = per_item is not None and not per_item.is_zero()

        if quantity > 1:
            if 0 < len(individual) < quantity:
                issues.append(
                    f"{label}: need durations for all {quantity} items, have only {len(individual)}"
                )
            elif not individual and not has_per_item:
                issues.append(
                    f"{label}: need approximate duration of each of the {quantity} items"
                )
        elif not individual and not has_per_item:
            issues.append(f"{label}: need approximate duration")
    return issues


# ── Fragment validation ──────────────────────────────────


def _clean_str(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _clean_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None


def _clean_quantity(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and value >= 0:
        return value
    return None


def _clean_duration(value: Any) -> Optional[Duration]:
    if isinstance(value, Duration):
        duration = value
    elif isinstance(value, Mapping):
        minutes = _clean_quantity(value.get("minutes")) or 0
        seconds = _clean_quantity(value.get("seconds")) or 0
        duration = Duration.from_parts(minutes, seconds)
    elif isinstance(value, (str, int)) and not isinstance(value, bool):
        duration = parse_duration(str(value))
    else:
        return None
    return None if duration.is_zero() else duration


def _clean_durations(value: Any) -> Optional[list[Duration]]:
    """Durations are positional: keep the leading run, stop at the first unusable entry."""
    if not isinstance(value, (list, tuple)):
        return None
    durations: list[Duration] = []
    for item in value:
        duration = _clean_duration(item)
        if duration is None:
            break
        durations.append(duration)
    return durations or None


def _clean_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _clean_email(value: Any) -> Optional[str]:
    email = _clean_str(value)
    return email if email and _EMAIL_PATTERN.match(email) else None


def _clean_link(value: Any) -> Optional[str]:
    link = _clean_str(value)
    return link if link and link.lower().startswith(("http://", "https://")) else None


def sanitize_fragment(raw: Mapping[str, Any]) -> QuoteFragment:
    """
    Turn an untrusted extraction result into a QuoteFragment.
    Each field is checked on its own; anything failing its check is dropped.
    """
    clean: dict[str, Any] = {
        "client_name": _clean_str(raw.get("client_name")),
        "client_email": _clean_email(raw.get("client_email")),
        "project_name": _clean_str(raw.get("project_name")),
        "is_existing_project": _clean_bool(raw.get("is_existing_project")),
        "brief": _clean_str(raw.get("brief")),
        "delivery_date": _clean_date(raw.get("delivery_date")),
        "assets_link": _clean_link(raw.get("assets_link")),
    }
    for kind in ServiceKind:
        prefix = kind.value
        clean.update({
            f"{prefix}_requested": _clean_bool(raw.get(f"{prefix}_requested")),
            f"{prefix}_quantity": _clean_quantity(raw.get(f"{prefix}_quantity")),
            f"{prefix}_duration": _clean_duration(raw.get(f"{prefix}_duration")),
            f"{prefix}_durations": _clean_durations(raw.get(f"{prefix}_durations")),
            f"{prefix}_format": _clean_str(raw.get(f"{prefix}_format")),
            f"{prefix}_resolution": _clean_str(raw.get(f"{prefix}_resolution")),
        })

    dropped = [
        k for k, v in raw.items()
        if v is not None and k in clean and clean[k] is None
    ]
    if dropped:
        logger.info(f"[INTAKE] Dropped invalid extracted fields: {dropped}")
    return QuoteFragment(**clean)


# ── Completion ───────────────────────────────────────────


def to_quote_request(data: QuoteFragment) -> QuoteRequest:
    """Freeze accumulated data into a QuoteRequest for pricing."""
    services: list[ServiceRequest] = []
    for kind in ServiceKind:
        quantity = requested_quantity(data, kind)
        if quantity <= 0:
            continue
        prefix = kind.value
        individual = (getattr(data, f"{prefix}_durations") or [])[:quantity]
        services.append(
            ServiceRequest(
                service_kind=kind,
                quantity=quantity,
                per_item_duration=getattr(data, f"{prefix}_duration") or Duration(),
                individual_durations=individual,
                format=getattr(data, f"{prefix}_format") or "",
                resolution=getattr(data, f"{prefix}_resolution") or "",
            )
        )

    return QuoteRequest(
        client_name=data.client_name,
        client_email=data.client_email,
        project_name=data.project_name or "",
        is_existing_project=bool(data.is_existing_project),
        services=services,
        delivery_date=data.delivery_date,
        brief=data.brief or "",
        assets_link=data.assets_link,
    )
