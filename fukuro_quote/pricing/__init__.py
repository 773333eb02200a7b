"""Pricing — duration parsing, tiered fees and quote composition."""

from fukuro_quote.pricing.duration_parser import parse_duration
from fukuro_quote.pricing.tiered_fee import aggregate_service_fee, gradual_fee
from fukuro_quote.pricing.quote_calculator import (
    Clock,
    FixedClock,
    SystemClock,
    compute_quote,
    is_urgent,
)

__all__ = [
    "parse_duration",
    "gradual_fee",
    "aggregate_service_fee",
    "Clock",
    "FixedClock",
    "SystemClock",
    "compute_quote",
    "is_urgent",
]
