# Role: Logging for the ArkWork backend. Every line carries the id of the HTTP request that produced it,
# and Gemini / Midtrans credentials are masked before anything is written to the console.

from __future__ import annotations

import logging
import logging.config
import re
import uuid
from contextvars import ContextVar
from typing import Optional

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

_NO_REQUEST = "-"
_current_request_id: ContextVar[str] = ContextVar("arkwork_request_id", default=_NO_REQUEST)

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._\-]+$")

# Gemini keys ("AIza..."), Midtrans keys ("SB-Mid-server-...", "Mid-client-..."), and HTTP auth headers.
_GEMINI_KEY_RE = re.compile(r"AIza[0-9A-Za-z\-_]{20,}")
_MIDTRANS_KEY_RE = re.compile(r"\b(?:SB-)?Mid-(?:server|client)-[0-9A-Za-z\-_]+")
_AUTH_HEADER_RE = re.compile(r"(?i)\b(bearer|basic)\s+[A-Za-z0-9\-._~+/]+=*")
_ENV_SECRET_RE = re.compile(r"(?i)\b(GEMINI_API_KEY|MIDTRANS_SERVER_KEY|api_key|server_key)\s*[:=]\s*([^\s,;&]+)")


def bind_request_id(incoming: Optional[str] = None) -> str:
    """
    Make `incoming` the id for the current request and return it.

    Client-supplied ids end up in every log line, so anything that is not a short token
    (spaces, newlines, quotes, overlong values) is replaced with a fresh uuid.
    """
    candidate = (incoming or "").strip()
    if not candidate or len(candidate) > MAX_REQUEST_ID_LENGTH or not _REQUEST_ID_RE.match(candidate):
        candidate = uuid.uuid4().hex
    _current_request_id.set(candidate)
    return candidate


def current_request_id() -> str:
    return _current_request_id.get()


def mask_secrets(text: str) -> str:
    text = _GEMINI_KEY_RE.sub("[gemini-key]", text)
    text = _MIDTRANS_KEY_RE.sub("[midtrans-key]", text)
    text = _AUTH_HEADER_RE.sub(r"\1 ***", text)
    return _ENV_SECRET_RE.sub(r"\1=***", text)


class ArkworkLogFilter(logging.Filter):
    """Stamps the request id and masks credentials on each record, in that order."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        # Key line: format once with args, then freeze the masked text so handlers cannot re-expand it.
        record.msg = mask_secrets(record.getMessage())
        record.args = ()
        return True


def configure_logging(log_level: str, *, app_env: str = "development") -> None:
    # 1) One console handler with the ArkWork filter
    # 2) Production drops the timestamp (the platform log collector adds its own)
    # 3) uvicorn loggers reuse the same handler; HTTP client libraries stay at WARNING
    fmt = "%(levelname)s %(name)s [%(request_id)s] %(message)s"
    if app_env != "production":
        fmt = "%(asctime)s " + fmt

    handler = {
        "class": "logging.StreamHandler",
        "formatter": "arkwork",
        "filters": ["arkwork"],
        "level": log_level,
    }
    uvicorn_logger = {"handlers": ["console"], "level": log_level, "propagate": False}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"arkwork": {"()": ArkworkLogFilter}},
            "formatters": {"arkwork": {"format": fmt}},
            "handlers": {"console": handler},
            "loggers": {
                "uvicorn": uvicorn_logger,
                "uvicorn.error": uvicorn_logger,
                "uvicorn.access": uvicorn_logger,
                "httpx": {"level": "WARNING"},
                "urllib3": {"level": "WARNING"},
            },
            "root": {"handlers": ["console"], "level": log_level},
        }
    )
