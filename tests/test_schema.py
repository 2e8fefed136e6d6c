"""Tests for the history payload schema and boundary validation."""

import pytest
from pydantic import ValidationError

from historylens.errors import HistoryLensError, InvalidHistoryInputError
from historylens.models.schema import HistoryQuery, HistoryRecord, parse_history_records

from conftest import NOW


class TestParseHistoryRecords:
    def test_accepts_both_naming_styles(self, history_payload):
        records = parse_history_records(history_payload)

        assert records[0] == HistoryRecord(
            url="https://www.rust-lang.org/",
            title="Rust Programming Language",
            visit_count=5,
            last_visit_time=history_payload[0]["lastVisitTime"],
        )
        assert records[1].visit_count == 3

    def test_integer_timestamp_accepted(self):
        records = parse_history_records(
            [{"url": "https://a.com", "title": "A", "visit_count": 1, "last_visit_time": 1700000000000}]
        )

        assert records[0].last_visit_time == 1700000000000.0

    def test_missing_field_rejected(self):
        with pytest.raises(InvalidHistoryInputError) as exc_info:
            parse_history_records([{"url": "https://a.com", "title": "A", "visit_count": 1}])

        message = str(exc_info.value)
        assert "last_visit_time" in message
        assert "Ensure entries have" in message
        assert isinstance(exc_info.value, HistoryLensError)

    def test_wrong_types_rejected_not_defaulted(self):
        payload = [{"url": 42, "title": "A", "visit_count": "5", "last_visit_time": "yesterday"}]

        with pytest.raises(InvalidHistoryInputError) as exc_info:
            parse_history_records(payload)

        problems = " ".join(exc_info.value.problems)
        assert "0.url" in problems
        assert "0.visit_count" in problems
        assert "0.last_visit_time" in problems

    def test_negative_visit_count_rejected(self):
        with pytest.raises(InvalidHistoryInputError):
            parse_history_records(
                [{"url": "https://a.com", "title": "A", "visit_count": -1, "last_visit_time": NOW}]
            )

    def test_not_a_list_rejected(self):
        with pytest.raises(InvalidHistoryInputError):
            parse_history_records({"url": "https://a.com"})

    def test_implausible_records_still_parse(self):
        records = parse_history_records(
            [{"url": "", "title": "", "visit_count": 0, "last_visit_time": -1.0}]
        )

        assert len(records) == 1

    def test_empty_payload(self):
        assert parse_history_records([]) == []


class TestHistoryRecord:
    def test_is_immutable(self, make_record):
        record = make_record()

        with pytest.raises(ValidationError):
            record.visit_count = 10

    def test_structural_equality(self, make_record):
        assert make_record("https://a.com", "A", 1, last_visit_time=5.0) == make_record(
            "https://a.com", "A", 1, last_visit_time=5.0
        )


class TestHistoryQuery:
    def test_defaults(self):
        query = HistoryQuery(text="rust")

        assert query.start_time is None
        assert query.end_time is None
        assert query.max_results == 50

    def test_negative_max_results_rejected(self):
        with pytest.raises(ValidationError):
            HistoryQuery(text="rust", max_results=-1)
