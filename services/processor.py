"""Request-level orchestration of heart-rate export ingestion."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from app.schemas import IngestResponse
from services.forwarder import GreptimeForwarder, build_default_forwarder
from services.line_protocol import encode_records
from services.reconstruction import parse_heart_rate_text

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 500
_PREVIEW_LINES = 3


class ProcessorService:
    """Turns a raw export into line protocol and hands it to the forwarder."""

    def __init__(self, forwarder: GreptimeForwarder) -> None:
        self.forwarder = forwarder

    def encode_text(self, text: str, device_id: str) -> List[str]:
        """Parse ``text`` and encode every reconstructed record.

        Raises ``NoValidPairsError`` when nothing could be paired.
        """
        records = parse_heart_rate_text(text)
        lines = encode_records(records, device_id)
        for index, line in enumerate(lines[:_PREVIEW_LINES], start=1):
            logger.debug("Line %d: %s", index, line, extra={"device_id": device_id})
        return lines

    async def ingest(self, text: str, device_id: str) -> IngestResponse:
        """Parse, encode and forward one export.

        ``NoValidPairsError`` and ``ForwardingError`` propagate to the caller.
        """
        logger.info(
            "Received heart rate export",
            extra={"device_id": device_id, "char_count": len(text)},
        )
        logger.debug("Raw export preview: %s", text[:_PREVIEW_CHARS])

        lines = self.encode_text(text, device_id)
        if not lines:
            return IngestResponse(
                success=False,
                message="No valid heart rate records found",
                processed_count=0,
            )

        await self.forwarder.write_lines(lines)

        logger.info(
            "Processed heart rate export",
            extra={"device_id": device_id, "record_count": len(lines)},
        )
        return IngestResponse(
            success=True,
            message=f"Successfully processed {len(lines)} heart rate records",
            processed_count=len(lines),
        )


@lru_cache
def build_default_processor() -> ProcessorService:
    """Factory that wires the processor with the shared forwarder."""
    return ProcessorService(forwarder=build_default_forwarder())
