"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.schemas import IngestResponse
from services.forwarder import ForwardingError
from services.processor import ProcessorService, build_default_processor
from services.reconstruction import NoValidPairsError
from settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_processor() -> ProcessorService:
    return build_default_processor()


def _failure(status_code: int, message: str) -> JSONResponse:
    payload = IngestResponse(success=False, message=message, processed_count=0)
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@router.post(
    "/heart-rate",
    response_model=IngestResponse,
    summary="Parse a heart-rate text export and forward it to GreptimeDB.",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": IngestResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": IngestResponse},
    },
)
async def ingest_heart_rate(
    request: Request,
    device_id: Optional[str] = Query(
        None, description="Device tag written with every record."
    ),
    processor: ProcessorService = Depends(get_processor),
) -> IngestResponse | JSONResponse:
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, f"Invalid UTF-8: {exc}")

    if device_id is None:
        device_id = get_settings().default_device_id

    try:
        return await processor.ingest(text, device_id)
    except NoValidPairsError as exc:
        logger.warning("Failed to parse heart rate data: %s", exc, extra={"device_id": device_id})
        return _failure(status.HTTP_400_BAD_REQUEST, f"Parse error: {exc}")
    except ForwardingError as exc:
        logger.error("Failed to forward heart rate data: %s", exc, extra={"device_id": device_id})
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
    response_class=PlainTextResponse,
)
async def healthcheck() -> str:
    return "OK"
