"""
Tests: plain-text receipt rendering.

Run with:
    pytest fukuro_quote/tests/test_summary.py -v
"""

from datetime import date

from fukuro_quote.models.enums import ServiceKind
from fukuro_quote.models.schemas import Duration, QuoteRequest, RateSchedule, ServiceRequest
from fukuro_quote.pricing import compute_quote
from fukuro_quote.services.summary_service import render_receipt

TODAY = date(2025, 1, 1)


def _request(**overrides):
    values = dict(
        client_name="Ana",
        project_name="Jingle",
        services=[ServiceRequest(
            service_kind=ServiceKind.AUDIO,
            per_item_duration=Duration(minutes=1, seconds=30),
            format="WAV",
        )],
        delivery_date=date(2025, 1, 2),
        brief="A radio jingle",
    )
    values.update(overrides)
    return QuoteRequest(**values)


class TestReceipt:
    def test_urgent_new_project(self):
        request = _request()
        receipt = render_receipt(request, compute_quote(request, RateSchedule(), TODAY))
        assert "CLIENT:   Ana" in receipt
        assert "EMAIL:    N/A" in receipt
        assert "SERVICES: Audio" in receipt
        assert "Duration (each):   1m 30s" in receipt
        assert "BASE FEE (project): $1,200.00 MXN" in receipt
        assert "URGENCY FEE: +$1,680.00 MXN (40%)" in receipt
        assert "TOTAL QUOTE: $5,880.00 MXN" in receipt
        assert "A radio jingle" in receipt
        assert "Three review rounds" in receipt

    def test_existing_project_without_urgency(self):
        request = _request(is_existing_project=True, delivery_date=date(2025, 3, 1))
        receipt = render_receipt(request, compute_quote(request, RateSchedule(), TODAY))
        assert "(existing project)" in receipt
        assert "URGENCY FEE" not in receipt
        assert "TOTAL QUOTE: $3,000.00 MXN" in receipt

    def test_missing_optional_fields(self):
        request = QuoteRequest()
        receipt = render_receipt(request, compute_quote(request, RateSchedule(), TODAY))
        assert "SERVICES: N/A" in receipt
        assert "DELIVERY DATE: N/A" in receipt
        assert "TOTAL QUOTE: $0.00 MXN" in receipt

    def test_currency(self):
        request = _request()
        receipt = render_receipt(request, compute_quote(request, RateSchedule(), TODAY), currency="USD")
        assert "USD" in receipt and "MXN" not in receipt
