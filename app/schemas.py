"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IngestResponse(BaseModel):
    """Outcome of a heart-rate export submission."""

    success: bool
    message: str
    processed_count: int = Field(
        default=0, ge=0, description="Number of records written downstream."
    )
