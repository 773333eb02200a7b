"""
Tests: free-form duration parsing.

Run with:
    pytest fukuro_quote/tests/test_duration_parser.py -v
"""

import pytest

from fukuro_quote.models.schemas import Duration
from fukuro_quote.pricing import parse_duration


class TestColonFormat:
    @pytest.mark.parametrize(
        "text, minutes, seconds",
        [("1:30", 1, 30), ("0:45", 0, 45), (" 10 : 05 ", 10, 5), ("2:00", 2, 0)],
    )
    def test_minutes_seconds(self, text, minutes, seconds):
        assert parse_duration(text) == Duration(minutes=minutes, seconds=seconds)

    def test_seconds_overflow_carries(self):
        assert parse_duration("1:75") == Duration(minutes=2, seconds=15)


class TestUnitTokens:
    @pytest.mark.parametrize(
        "text, minutes, seconds",
        [
            ("2 min", 2, 0),
            ("3 minutos", 3, 0),
            ("45 seg", 0, 45),
            ("30 segundos", 0, 30),
            ("1m30s", 1, 30),
            ("2 minutes 15 seconds", 2, 15),
            ("about 4 mins", 4, 0),
            ("20s", 0, 20),
            ("45 segs", 0, 45),
            ("1 min 30 segs", 1, 30),
        ],
    )
    def test_units(self, text, minutes, seconds):
        assert parse_duration(text) == Duration(minutes=minutes, seconds=seconds)

    @pytest.mark.parametrize("text", ["1.5 minutes", "1,5 min"])
    def test_decimal_minutes(self, text):
        assert parse_duration(text) == Duration(minutes=1, seconds=30)

    def test_seconds_beyond_a_minute_normalize(self):
        assert parse_duration("75 seconds") == Duration(minutes=1, seconds=15)

    def test_case_insensitive(self):
        assert parse_duration("2 MIN") == Duration(minutes=2)


class TestFallbacks:
    def test_bare_integer_is_seconds(self):
        assert parse_duration("90") == Duration(minutes=1, seconds=30)

    @pytest.mark.parametrize("text", [None, "", "   ", "not sure yet", "a while"])
    def test_unparseable_is_zero(self, text):
        assert parse_duration(text).is_zero()

    def test_never_raises_on_odd_input(self):
        for text in ["::", "1:2:3", "-5", "min", "s"]:
            assert isinstance(parse_duration(text), Duration)


class TestDuration:
    def test_total_minutes(self):
        assert Duration(minutes=1, seconds=30).total_minutes == 1.5

    def test_str(self):
        assert str(Duration(minutes=2, seconds=5)) == "2m 5s"

    def test_negative_parts_clamp_to_zero(self):
        assert Duration.from_parts(-1, -30).is_zero()

    def test_seconds_must_be_below_sixty(self):
        with pytest.raises(ValueError):
            Duration(minutes=0, seconds=60)
