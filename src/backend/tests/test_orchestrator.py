"""
Tests for the vision/fallback merge, the ticket models and the
ticket-detection helpers.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import logging

import pytest

from ticketscan.models.ticket import TICKET_FIELDS, TicketRecord, VisionChannelResult
from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.orchestrator import (
    DEFAULT_EXTRACTORS,
    ExtractionOrchestrator,
    coerce_vision_result,
    extract_ticket,
    is_valid_ticket,
    looks_like_movie_ticket,
)


AMC_TICKET = """\
AMC EMPIRE 25
234 West 42nd Street
DUNE: PART TWO (PG-13)
Date: 12/03/2024
Show Time: 7:30 PM
Auditorium 12
Row F Seat 9
Price: $15.99
Ticket #: 40211873
"""

EXPECTED_FALLBACK = {
    'movie_title': "Dune: Part Two",
    'theater_name': "AMC Empire",
    'theater_chain': "AMC",
    'show_date': "12/03/24",
    'show_time': "7:30 PM",
    'price': "15.99",
    'seat_number': "F-09",
    'movie_rating': "PG-13",
    'theater_room': "Theater 12",
    'ticket_number': "40211873",
}


class BrokenExtractor(FieldExtractor):
    field_name = 'price'

    def extract(self, raw_text):
        raise RuntimeError("pattern table corrupted")


class FixedExtractor(FieldExtractor):
    field_name = 'movie_title'

    def extract(self, raw_text):
        return "Fixed Title"


@pytest.fixture
def orchestrator():
    return ExtractionOrchestrator()


class TestFallbackOnly:
    """No vision result: every field comes from the extractors."""

    def test_full_ticket(self, orchestrator):
        record = orchestrator.build(AMC_TICKET)
        assert record.model_dump() == EXPECTED_FALLBACK

    def test_matches_each_extractor(self, orchestrator):
        record = orchestrator.build(AMC_TICKET, None)
        for field_name in TICKET_FIELDS:
            expected = DEFAULT_EXTRACTORS[field_name].extract(AMC_TICKET)
            assert getattr(record, field_name) == expected, field_name

    def test_sources_and_presence(self, orchestrator):
        report = orchestrator.extract(AMC_TICKET)
        assert set(report.sources.values()) == {'fallback'}
        assert all(report.presence.values())
        assert report.failed_fields == []

    def test_empty_text(self, orchestrator):
        report = orchestrator.extract("")
        assert report.record.populated_fields() == []
        assert report.presence == {name: False for name in TICKET_FIELDS}
        assert set(report.sources.values()) == {None}

    def test_module_entry_point(self):
        assert extract_ticket(AMC_TICKET).model_dump() == EXPECTED_FALLBACK


class TestVisionPrecedence:
    """A present, non-blank vision value always wins."""

    def test_vision_value_wins(self, orchestrator):
        report = orchestrator.extract(AMC_TICKET, {"movieRating": "R"})
        assert report.record.movie_rating == "R"
        assert report.sources['movie_rating'] == 'vision'
        assert report.record.movie_title == "Dune: Part Two"
        assert report.sources['movie_title'] == 'fallback'

    def test_snake_case_keys(self, orchestrator):
        record = orchestrator.build(AMC_TICKET, {"movie_rating": "R"})
        assert record.movie_rating == "R"

    def test_value_is_stripped(self, orchestrator):
        record = orchestrator.build(AMC_TICKET, {"movieTitle": "  Dune  "})
        assert record.movie_title == "Dune"

    def test_blank_value_falls_back(self, orchestrator):
        record = orchestrator.build(AMC_TICKET, {"movieTitle": "   ", "seatNumber": ""})
        assert record.movie_title == "Dune: Part Two"
        assert record.seat_number == "F-09"

    def test_model_instance(self, orchestrator):
        vision = VisionChannelResult(theater_name="AMC Empire 25", ticket_type="movie")
        record = orchestrator.build(AMC_TICKET, vision)
        assert record.theater_name == "AMC Empire 25"

    def test_vision_only(self, orchestrator):
        record = orchestrator.build(None, TicketRecord(price="9.99"))
        assert record.price == "9.99"
        assert record.populated_fields() == ['price']


class TestVisionEnvelope:

    def test_successful_envelope(self, orchestrator):
        envelope = {"success": True, "data": {"movieTitle": "Wicked"}}
        assert orchestrator.build(AMC_TICKET, envelope).movie_title == "Wicked"

    def test_failed_envelope_is_absent(self, orchestrator):
        envelope = {"success": False, "error": "quota exceeded", "data": {"movieTitle": "Wicked"}}
        assert orchestrator.build(AMC_TICKET, envelope).movie_title == "Dune: Part Two"

    def test_malformed_field_falls_back(self, orchestrator, caplog):
        with caplog.at_level(logging.WARNING):
            record = orchestrator.build(AMC_TICKET, {"movieTitle": ["Dune", "Wicked"]})
        assert record.movie_title == "Dune: Part Two"
        assert "Dropping malformed vision field 'movieTitle'" in caplog.text

    def test_valid_fields_survive_a_malformed_one(self, orchestrator):
        report = orchestrator.extract(AMC_TICKET, {"movieRating": "R", "seatNumber": ["F", "12"]})
        assert report.record.movie_rating == "R"
        assert report.sources['movie_rating'] == 'vision'
        assert report.record.seat_number == "F-09"
        assert report.sources['seat_number'] == 'fallback'

    @pytest.mark.parametrize("data", ["garbled", ["movieTitle", "Wicked"], 42])
    def test_envelope_data_not_a_mapping(self, orchestrator, caplog, data):
        with caplog.at_level(logging.WARNING):
            record = orchestrator.build(AMC_TICKET, {"success": True, "data": data})
        assert record.model_dump() == EXPECTED_FALLBACK
        assert "Discarding malformed vision result" in caplog.text

    def test_numeric_values_become_text(self):
        vision = coerce_vision_result({"price": 12.5, "seatNumber": 14})
        assert vision.price == "12.5"
        assert vision.seat_number == "14"

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            coerce_vision_result(42)


class TestFaultIsolation:
    """One extractor raising never affects the other fields."""

    def test_broken_extractor(self, caplog):
        orchestrator = ExtractionOrchestrator(extractors={'price': BrokenExtractor()})
        with caplog.at_level(logging.WARNING):
            report = orchestrator.extract(AMC_TICKET)

        assert report.record.price is None
        assert report.failed_fields == ['price']
        assert report.sources['price'] is None
        assert report.record.movie_title == "Dune: Part Two"
        assert report.record.seat_number == "F-09"
        assert "Extractor failed for price" in caplog.text

    def test_vision_covers_broken_field(self):
        orchestrator = ExtractionOrchestrator(extractors={'price': BrokenExtractor()})
        report = orchestrator.extract(AMC_TICKET, {"price": "15.99"})
        assert report.record.price == "15.99"
        assert report.failed_fields == []

    def test_injected_extractor(self):
        orchestrator = ExtractionOrchestrator(extractors={'movie_title': FixedExtractor()})
        assert orchestrator.build(AMC_TICKET).movie_title == "Fixed Title"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            ExtractionOrchestrator(extractors={'popcorn': FixedExtractor()})


class TestTicketModels:

    def test_camel_case_input(self):
        record = TicketRecord.model_validate({'movieTitle': 'Dune', 'seatNumber': 'A-12'})
        assert record.movie_title == 'Dune'
        assert record.seat_number == 'A-12'

    def test_presence(self):
        record = TicketRecord(show_date='12/03/24')
        presence = record.presence()
        assert list(presence) == list(TICKET_FIELDS)
        assert presence['show_date'] is True
        assert presence['movie_title'] is False


class TestTicketChecks:

    def test_looks_like_movie_ticket(self):
        assert looks_like_movie_ticket(AMC_TICKET)
        assert not looks_like_movie_ticket("Walmart\nTotal $5.00")

    def test_keyword_threshold(self):
        assert looks_like_movie_ticket("ADMIT ONE", threshold=1)
        assert not looks_like_movie_ticket("ADMIT ONE", threshold=2)

    def test_is_valid_ticket(self):
        assert is_valid_ticket(TicketRecord(**EXPECTED_FALLBACK))
        assert not is_valid_ticket(TicketRecord(movie_title="Dune", price="15.99"))
        assert not is_valid_ticket(TicketRecord(price="15.99", show_date="12/03/24",
                                                show_time="7:30 PM", seat_number="F-09"))

    def test_supporting_field_count(self):
        record = TicketRecord(movie_title="Dune", price="15.99")
        assert is_valid_ticket(record, min_supporting_fields=1)
