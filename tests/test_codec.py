"""Tests for the entries and history codec."""

import json

from hydration_tracker.adapters.codec import (
    decode_entries,
    decode_history,
    encode_entries,
    encode_history,
)
from hydration_tracker.domain.intake import DailyRecord, IntakeEntry, WaterUnit
from tests.conftest import local_time


def test_entries_roundtrip() -> None:
    entries = [
        IntakeEntry(id="a", timestamp=local_time(2024, 1, 1, hour=8), amount=250.0),
        IntakeEntry(id="b", timestamp=local_time(2024, 1, 1, hour=21), amount=-3.5),
    ]

    assert decode_entries(encode_entries(entries)) == entries
    assert decode_entries(encode_entries([])) == []


def test_history_roundtrip() -> None:
    records = [
        DailyRecord("2024-01-02", 1800.0, 2000.0, WaterUnit.ML),
        DailyRecord("2024-01-01", 3.0, 2.0, WaterUnit.BOTTLE),
    ]

    assert decode_history(encode_history(records)) == records
    assert decode_history(encode_history([])) == []


def test_history_uses_flat_camel_case_objects() -> None:
    raw = encode_history([DailyRecord("2024-01-01", 64.0, 80.0, WaterUnit.OZ)])

    assert json.loads(raw) == [
        {"dateKey": "2024-01-01", "totalIntake": 64.0, "goal": 80.0, "unit": "oz"}
    ]


def test_entries_use_flat_objects() -> None:
    raw = encode_entries(
        [IntakeEntry(id="x", timestamp=local_time(2024, 1, 1), amount=100.0)]
    )

    assert list(json.loads(raw)[0]) == ["id", "timestamp", "amount"]


def test_malformed_data_decodes_to_empty_list() -> None:
    assert decode_entries("not json") == []
    assert decode_entries('[{"id": "a"}]') == []
    assert decode_entries(42) == []
    assert decode_entries(None) == []
    assert decode_history('{"dateKey": "2024-01-01"}') == []
    unknown_unit = '[{"dateKey": "x", "totalIntake": 1, "goal": 1, "unit": "gal"}]'
    assert decode_history(unknown_unit) == []
    assert decode_history(None) == []
