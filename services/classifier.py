"""Line-by-line classification of raw heart-rate exports."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from services.timestamps import parse_localized_timestamp

logger = logging.getLogger(__name__)

MIN_BPM = 30.0
MAX_BPM = 220.0


@dataclass
class ClassifiedLines:
    """Samples and timestamps in the order they were encountered."""

    samples: List[float] = field(default_factory=list)
    timestamps: List[datetime] = field(default_factory=list)
    skipped: int = 0


def split_lines(text: str) -> list[str]:
    """Return the trimmed, non-empty lines of ``text``."""
    lines = (line.strip() for line in text.strip().split("\n"))
    return [line for line in lines if line]


def _parse_number(line: str) -> Optional[float]:
    # float() also accepts digit grouping ("1_00") and non-ASCII digits.
    if "_" in line or not line.isascii():
        return None
    try:
        return float(line)
    except ValueError:
        return None


def is_valid_sample(value: float) -> bool:
    return MIN_BPM <= value <= MAX_BPM


def classify_lines(lines: Iterable[str]) -> ClassifiedLines:
    """Sort each line into the sample or timestamp sequence.

    Numbers outside the BPM range are dropped rather than retried as
    timestamps. Lines that match neither are skipped.
    """
    result = ClassifiedLines()

    for line_number, line in enumerate(lines):
        number = _parse_number(line)
        if number is not None and is_valid_sample(number):
            result.samples.append(number)
            logger.debug(
                "Found heart rate %s", number, extra={"line_number": line_number}
            )
            continue

        timestamp = parse_localized_timestamp(line) if number is None else None
        if timestamp is not None:
            result.timestamps.append(timestamp)
            logger.debug(
                "Found timestamp %s",
                timestamp.isoformat(),
                extra={"line_number": line_number},
            )
            continue

        result.skipped += 1
        reason = "out of range" if number is not None else "unrecognized"
        logger.debug(
            "Skipping line %r",
            line,
            extra={"line_number": line_number, "reason": reason},
        )

    logger.info(
        "Classified export lines",
        extra={
            "sample_count": len(result.samples),
            "timestamp_count": len(result.timestamps),
            "skipped_count": result.skipped,
        },
    )
    return result
