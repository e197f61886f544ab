"""Rebuild an ordered heart-rate series from classified export lines."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Sequence

from models.records import HeartRateRecord
from services.classifier import classify_lines, split_lines

logger = logging.getLogger(__name__)


class NoValidPairsError(ValueError):
    """Raised when an export yields no sample/timestamp pair."""

    def __init__(self) -> None:
        super().__init__("No valid heart rate and timestamp pairs found")


def reconstruct_records(
    samples: Sequence[float], timestamps: Sequence[datetime]
) -> List[HeartRateRecord]:
    """Pair samples with timestamps by position and order them by time.

    Surplus entries in the longer sequence are dropped. Records sharing a
    timestamp keep their pairing order.
    """
    pair_count = min(len(samples), len(timestamps))
    if pair_count == 0:
        raise NoValidPairsError()

    records = [
        HeartRateRecord(value=value, timestamp=timestamp)
        for value, timestamp in zip(samples[:pair_count], timestamps[:pair_count])
    ]
    records.sort(key=lambda record: record.timestamp)

    logger.info("Reconstructed heart rate series", extra={"record_count": len(records)})
    return records


def parse_heart_rate_text(text: str) -> List[HeartRateRecord]:
    """Run classification and reconstruction over a raw export."""
    classified = classify_lines(split_lines(text))
    return reconstruct_records(classified.samples, classified.timestamps)
