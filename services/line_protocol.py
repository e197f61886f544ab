"""InfluxDB line protocol rendering for heart-rate records."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, List

from models.records import HeartRateRecord

MEASUREMENT = "heart_rate"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def escape_tag_value(value: str) -> str:
    return value.replace(" ", "\\ ").replace(",", "\\,")


def format_field_value(value: float) -> str:
    # Whole numbers are written without a fractional part: 72.0 -> "72".
    if value.is_integer():
        return str(int(value))
    return repr(value)


def epoch_millis(timestamp: datetime) -> int:
    return (timestamp - _EPOCH) // _MILLISECOND


def encode_record(record: HeartRateRecord, device_id: str) -> str:
    """Render one record as ``heart_rate,device_id=<id> value=<v> <ms>``."""
    return (
        f"{MEASUREMENT},device_id={escape_tag_value(device_id)} "
        f"value={format_field_value(record.value)} {epoch_millis(record.timestamp)}"
    )


def encode_records(records: Iterable[HeartRateRecord], device_id: str) -> List[str]:
    return [encode_record(record, device_id) for record in records]
