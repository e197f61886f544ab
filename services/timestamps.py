"""Parsing of the localized clock strings found in heart-rate exports."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

# Exports are written in China Standard Time.
SOURCE_TIMEZONE = timezone(timedelta(hours=8))

_LOCALIZED_PATTERN = re.compile(
    r"([0-9]{4})年([0-9]{1,2})月([0-9]{1,2})日\s+([0-9]{1,2}):([0-9]{2})"
)


def parse_localized_timestamp(
    value: str, source_tz: timezone = SOURCE_TIMEZONE
) -> Optional[datetime]:
    """Convert a ``2025年6月2日 21:28`` style string into a UTC datetime.

    Returns ``None`` when the text does not contain the pattern or when the
    matched components do not form a representable date-time.
    """
    match = _LOCALIZED_PATTERN.search(value)
    if match is None:
        return None

    year, month, day, hour, minute = (int(part) for part in match.groups())
    try:
        local = datetime(year, month, day, hour, minute, tzinfo=source_tz)
        return local.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None
