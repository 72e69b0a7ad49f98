# Role: FastAPI dependencies. Services are built once in create_app() and stored on app.state;
# routes pull them from there so tests can swap in stubs per app instance.

import json
from typing import Any

from fastapi import Request

from arkwork.config import Settings
from arkwork.core.chat_service import ChatService
from arkwork.core.errors import ErrorCode, ServiceError, bad_request
from arkwork.payments.midtrans_client import MidtransClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def get_midtrans_client(request: Request) -> MidtransClient:
    return request.app.state.midtrans_client


def _too_large(limit: int) -> ServiceError:
    return ServiceError(ErrorCode.PAYLOAD_TOO_LARGE, 413, f"Request body exceeds {limit} bytes.")


async def read_capped_body(request: Request, limit: int) -> bytes:
    # 1) Reject early on a declared Content-Length over the limit
    # 2) Otherwise stream and stop as soon as the limit is crossed (chunked bodies have no length)
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise _too_large(limit)

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise _too_large(limit)
        chunks.append(chunk)
    return b"".join(chunks)


async def read_json_body(request: Request) -> Any:
    # Key line: an empty body behaves like {} so the validator reports the missing fields.
    raw = await read_capped_body(request, get_settings(request).max_body_bytes)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise bad_request([{"field": "(body)", "message": "Body must be valid JSON", "type": "json_invalid"}])
