"""Unit tests for line protocol encoding."""

from __future__ import annotations

from datetime import datetime, timezone

from models.records import HeartRateRecord
from services.line_protocol import (
    encode_record,
    encode_records,
    epoch_millis,
    escape_tag_value,
    format_field_value,
)

INSTANT = datetime(2025, 6, 2, 13, 28, tzinfo=timezone.utc)


def test_encode_record_layout() -> None:
    line = encode_record(HeartRateRecord(value=72.0, timestamp=INSTANT), "apple-watch")

    assert line == "heart_rate,device_id=apple-watch value=72 1748870880000"


def test_fractional_values_keep_their_digits() -> None:
    assert format_field_value(72.5) == "72.5"
    assert format_field_value(30.0) == "30"
    assert format_field_value(219.99) == "219.99"


def test_device_id_escaping() -> None:
    assert escape_tag_value("my watch, 2") == "my\\ watch\\,\\ 2"

    line = encode_record(HeartRateRecord(value=80.0, timestamp=INSTANT), "my watch, 2")
    assert line.startswith("heart_rate,device_id=my\\ watch\\,\\ 2 value=80 ")


def test_other_characters_are_left_alone() -> None:
    assert escape_tag_value('a=b"c') == 'a=b"c'


def test_encoding_is_pure() -> None:
    record = HeartRateRecord(value=64.5, timestamp=INSTANT)

    assert encode_record(record, "band 1") == encode_record(record, "band 1")


def test_epoch_millis_is_exact() -> None:
    assert epoch_millis(datetime(1970, 1, 1, tzinfo=timezone.utc)) == 0
    assert epoch_millis(INSTANT) == 1748870880000
    assert epoch_millis(INSTANT) % 60000 == 0


def test_encode_records_keeps_order() -> None:
    records = [
        HeartRateRecord(value=72.0, timestamp=INSTANT),
        HeartRateRecord(value=75.0, timestamp=datetime(2025, 6, 2, 13, 29, tzinfo=timezone.utc)),
    ]

    lines = encode_records(records, "apple-watch")

    assert lines == [
        "heart_rate,device_id=apple-watch value=72 1748870880000",
        "heart_rate,device_id=apple-watch value=75 1748870940000",
    ]
