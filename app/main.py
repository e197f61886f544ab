from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import router
from logging_config import configure_logging
from services.forwarder import build_default_forwarder
from services.processor import build_default_processor
from settings import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    forwarder = build_default_forwarder()
    try:
        yield
    finally:
        await forwarder.aclose()
        build_default_processor.cache_clear()
        build_default_forwarder.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Heart Rate Proxy",
        description="Reconstructs heart-rate exports and forwards them to GreptimeDB.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


def main() -> None:
    settings = get_settings()
    configure_logging()
    logger.info(
        "Starting heart rate proxy: GreptimeDB %s, database %s, port %d",
        settings.greptime_url,
        settings.greptime_db,
        settings.port,
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


app = create_app()

if __name__ == "__main__":
    main()
