"""Delivery of encoded line protocol batches to GreptimeDB."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Sequence

import httpx

from settings import get_settings

logger = logging.getLogger(__name__)

WRITE_PATH = "/v1/influxdb/api/v2/write"


class ForwardingError(RuntimeError):
    """Raised when a batch could not be written downstream."""


class GreptimeForwarder:
    """Writes line protocol batches through GreptimeDB's InfluxDB endpoint."""

    def __init__(
        self,
        base_url: str,
        database: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.database = database
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def write_url(self) -> str:
        return f"{self.base_url}{WRITE_PATH}"

    async def write_lines(self, lines: Sequence[str]) -> None:
        """Send all lines in a single request; no retry on failure."""
        body = "\n".join(lines)
        logger.info(
            "Sending batch to GreptimeDB",
            extra={"url": self.write_url, "record_count": len(lines)},
        )

        try:
            response = await self._client.post(
                self.write_url,
                params={"db": self.database, "precision": "ms"},
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                content=body.encode("utf-8"),
            )
        except httpx.HTTPError as exc:
            raise ForwardingError(f"GreptimeDB error: {exc}") from exc

        if not response.is_success:
            logger.error(
                "GreptimeDB rejected batch",
                extra={"status_code": response.status_code, "url": self.write_url},
            )
            raise ForwardingError(f"GreptimeDB error: {response.text}")

        logger.info("Batch written to GreptimeDB", extra={"record_count": len(lines)})

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


@lru_cache
def build_default_forwarder() -> GreptimeForwarder:
    """Factory that wires the forwarder from environment settings."""
    settings = get_settings()
    return GreptimeForwarder(
        base_url=settings.greptime_url,
        database=settings.greptime_db,
        timeout=settings.request_timeout,
    )
