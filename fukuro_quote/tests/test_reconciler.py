"""
Tests: intake reconciliation — merge, required fields, duration sufficiency
and sanitizing of extracted fragments.

Run with:
    pytest fukuro_quote/tests/test_reconciler.py -v
"""

from datetime import date

from fukuro_quote.intake import (
    duration_sufficiency,
    merge,
    missing_required_fields,
    sanitize_fragment,
    to_quote_request,
)
from fukuro_quote.intake.reconciler import requested_quantity
from fukuro_quote.models.enums import ServiceKind
from fukuro_quote.models.schemas import Duration
from fukuro_quote.models.state import QuoteFragment


class TestMerge:
    def test_incoming_value_overrides(self):
        merged = merge(QuoteFragment(brief="X"), QuoteFragment(brief="Y"))
        assert merged.brief == "Y"

    def test_none_never_overwrites(self):
        merged = merge(QuoteFragment(brief="X"), QuoteFragment(brief=None))
        assert merged.brief == "X"

    def test_fields_accumulate(self):
        merged = merge(
            QuoteFragment(project_name="Jingle"),
            QuoteFragment(audio_requested=True, audio_duration=Duration(minutes=1)),
        )
        assert merged.project_name == "Jingle"
        assert merged.audio_requested is True
        assert merged.audio_duration == Duration(minutes=1)

    def test_false_is_a_value(self):
        merged = merge(QuoteFragment(is_existing_project=True), QuoteFragment(is_existing_project=False))
        assert merged.is_existing_project is False

    def test_previous_is_not_mutated(self):
        previous = QuoteFragment(brief="X")
        merge(previous, QuoteFragment(brief="Y"))
        assert previous.brief == "X"


class TestMissingRequiredFields:
    def test_empty_fragment(self):
        assert missing_required_fields(QuoteFragment()) == {"brief", "project_name"}

    def test_existing_project_needs_no_name(self):
        data = QuoteFragment(is_existing_project=True, brief="Add subtitles")
        assert missing_required_fields(data) == set()

    def test_blank_strings_count_as_missing(self):
        data = QuoteFragment(project_name="  ", brief="")
        assert missing_required_fields(data) == {"brief", "project_name"}

    def test_complete(self):
        assert missing_required_fields(QuoteFragment(project_name="P", brief="B")) == set()


class TestDurationSufficiency:
    def test_no_services_no_issues(self):
        assert duration_sufficiency(QuoteFragment()) == []

    def test_single_item_without_duration(self):
        issues = duration_sufficiency(QuoteFragment(audio_requested=True))
        assert issues == ["Audio: need approximate duration"]

    def test_single_item_with_duration(self):
        data = QuoteFragment(audio_requested=True, audio_duration=Duration(minutes=1))
        assert duration_sufficiency(data) == []

    def test_zero_duration_counts_as_missing(self):
        data = QuoteFragment(video_requested=True, video_duration=Duration())
        assert duration_sufficiency(data) == ["Video: need approximate duration"]

    def test_multiple_items_without_any_duration(self):
        data = QuoteFragment(video_requested=True, video_quantity=3)
        assert duration_sufficiency(data) == [
            "Video: need approximate duration of each of the 3 items"
        ]

    def test_multiple_items_with_per_item_default(self):
        data = QuoteFragment(video_quantity=3, video_duration=Duration(seconds=45))
        assert duration_sufficiency(data) == []

    def test_partial_individual_durations(self):
        data = QuoteFragment(
            audio_quantity=4,
            audio_duration=Duration(minutes=1),
            audio_durations=[Duration(minutes=2), Duration(seconds=30)],
        )
        assert duration_sufficiency(data) == ["Audio: need durations for all 4 items, have only 2"]

    def test_all_individual_durations(self):
        data = QuoteFragment(audio_quantity=2, audio_durations=[Duration(minutes=1), Duration(minutes=2)])
        assert duration_sufficiency(data) == []

    def test_not_requested_service_is_ignored(self):
        data = QuoteFragment(audio_requested=False, audio_quantity=3)
        assert duration_sufficiency(data) == []

    def test_both_services_reported(self):
        data = QuoteFragment(audio_requested=True, video_requested=True)
        assert duration_sufficiency(data) == [
            "Audio: need approximate duration",
            "Video: need approximate duration",
        ]


class TestSanitizeFragment:
    def test_valid_fields_kept(self):
        fragment = sanitize_fragment({
            "client_name": " Ana ",
            "client_email": "ana@example.com",
            "project_name": "Jingle",
            "delivery_date": "2025-01-10",
            "assets_link": "https://drive.example.com/x",
            "audio_requested": True,
            "audio_duration": "1:30",
        })
        assert fragment.client_name == "Ana"
        assert fragment.client_email == "ana@example.com"
        assert fragment.delivery_date == date(2025, 1, 10)
        assert fragment.assets_link == "https://drive.example.com/x"
        assert fragment.audio_duration == Duration(minutes=1, seconds=30)

    def test_invalid_fields_dropped(self):
        fragment = sanitize_fragment({
            "client_email": "not-an-email",
            "delivery_date": "next friday",
            "assets_link": "ftp://files",
            "audio_quantity": -2,
            "video_duration": "no idea",
        })
        assert fragment.client_email is None
        assert fragment.delivery_date is None
        assert fragment.assets_link is None
        assert fragment.audio_quantity is None
        assert fragment.video_duration is None

    def test_durations_do_not_imply_a_quantity(self):
        fragment = sanitize_fragment({"video_durations": ["0:30", "1:00", "0:45"]})
        assert fragment.video_quantity is None
        assert len(fragment.video_durations) == 3

    def test_durations_truncated_at_first_unparseable_entry(self):
        fragment = sanitize_fragment({"audio_quantity": 3, "audio_durations": ["1:00", "?", "30 seg"]})
        assert fragment.audio_quantity == 3
        assert fragment.audio_durations == [Duration(minutes=1)]

    def test_unparseable_first_duration_drops_list(self):
        assert sanitize_fragment({"audio_durations": ["soon", "1:00"]}).audio_durations is None

    def test_boolean_words(self):
        assert sanitize_fragment({"is_existing_project": "sí"}).is_existing_project is True
        assert sanitize_fragment({"is_existing_project": "no"}).is_existing_project is False
        assert sanitize_fragment({"is_existing_project": "maybe"}).is_existing_project is None

    def test_unknown_keys_ignored(self):
        assert sanitize_fragment({"budget": 10}) == QuoteFragment()


class TestToQuoteRequest:
    def test_builds_services(self):
        data = QuoteFragment(
            project_name="Launch",
            brief="Teaser",
            video_quantity=2,
            video_duration=Duration(seconds=45),
            audio_requested=False,
        )
        request = to_quote_request(data)
        assert [s.service_kind for s in request.services] == [ServiceKind.VIDEO]
        assert request.service(ServiceKind.VIDEO).quantity == 2
        assert request.is_existing_project is False

    def test_requested_without_quantity_is_one_item(self):
        request = to_quote_request(QuoteFragment(audio_requested=True, audio_duration=Duration(minutes=1)))
        assert request.service(ServiceKind.AUDIO).quantity == 1

    def test_extra_individual_durations_truncated(self):
        data = QuoteFragment(
            audio_quantity=1,
            audio_durations=[Duration(minutes=1), Duration(minutes=2)],
        )
        request = to_quote_request(data)
        assert request.service(ServiceKind.AUDIO).individual_durations == [Duration(minutes=1)]


class TestQuantityAcrossTurns:
    def test_stated_quantity_survives_later_durations(self):
        data = merge(
            sanitize_fragment({"project_name": "Launch", "brief": "Teasers", "video_quantity": 3}),
            sanitize_fragment({"video_durations": ["1:00", "0:30"]}),
        )
        assert data.video_quantity == 3
        assert requested_quantity(data, ServiceKind.VIDEO) == 3
        assert duration_sufficiency(data) == ["Video: need durations for all 3 items, have only 2"]

    def test_durations_alone_give_the_count(self):
        data = sanitize_fragment({"video_durations": ["1:00", "0:30"]})
        assert requested_quantity(data, ServiceKind.VIDEO) == 2
        assert duration_sufficiency(data) == []
        assert to_quote_request(data).service(ServiceKind.VIDEO).quantity == 2

    def test_not_requested_wins_over_durations(self):
        data = QuoteFragment(audio_requested=False, audio_durations=[Duration(minutes=1)])
        assert requested_quantity(data, ServiceKind.AUDIO) == 0
