from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_GREPTIME_URL_ENV = "GREPTIME_URL"
_GREPTIME_DB_ENV = "GREPTIME_DB"
_GREPTIME_TIMEOUT_ENV = "GREPTIME_TIMEOUT"
_PORT_ENV = "PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_DEVICE_ID_ENV = "DEFAULT_DEVICE_ID"


@dataclass(frozen=True)
class Settings:
    greptime_url: str
    greptime_db: str
    request_timeout: float
    port: int
    log_level: str
    default_device_id: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_port(default: int) -> int:
    value = os.getenv(_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed < 65536 else default


def _read_timeout(default: float) -> float:
    value = os.getenv(_GREPTIME_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        greptime_url=_read_str_env(_GREPTIME_URL_ENV, "http://127.0.0.1").rstrip("/"),
        greptime_db=_read_str_env(_GREPTIME_DB_ENV, "heartbeat_test"),
        request_timeout=_read_timeout(30.0),
        port=_read_port(3000),
        log_level=_read_log_level("INFO"),
        default_device_id=_read_str_env(_DEVICE_ID_ENV, "apple-watch"),
    )
