"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class HeartRateRecord:
    """A heart-rate sample paired with the UTC minute it was taken."""

    value: float
    timestamp: datetime
