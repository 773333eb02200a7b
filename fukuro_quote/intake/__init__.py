"""Intake — multi-turn gathering and validation of quote data."""

from fukuro_quote.intake.reconciler import (
    duration_sufficiency,
    merge,
    missing_required_fields,
    sanitize_fragment,
    to_quote_request,
)
from fukuro_quote.intake.session import IntakeSession, IntakeSessionError

__all__ = [
    "merge",
    "missing_required_fields",
    "duration_sufficiency",
    "sanitize_fragment",
    "to_quote_request",
    "IntakeSession",
    "IntakeSessionError",
]
