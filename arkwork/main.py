# Role: FastAPI app bootstrap. Loads environment config early, builds Settings once, wires the services
# onto app.state, registers routers/CORS/error handlers, and exposes the plain health endpoints.

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import arkwork.config
arkwork.config.load_env()

from arkwork.api.chat import router as chat_router
from arkwork.api.payments import router as payments_router
from arkwork.config import Settings
from arkwork.core.chat_service import ChatService
from arkwork.logging_config import REQUEST_ID_HEADER, bind_request_id, configure_logging
from arkwork.payments.midtrans_client import MidtransClient

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]
CORS_REJECTED_MESSAGE = "CORS: Origin not allowed"


def create_app(
    settings: Optional[Settings] = None,
    chat_service: Optional[ChatService] = None,
    midtrans_client: Optional[MidtransClient] = None,
) -> FastAPI:
    # 1) Settings are read once here and injected everywhere else
    # 2) Services live on app.state (see api/deps.py)
    # 3) Middleware, routers, error handlers
    settings = settings or Settings.from_env()

    if not settings.has_gemini_key:
        logger.warning("[ArkWork Agent] GEMINI_API_KEY belum di-set (/api/chat akan menjawab 503).")

    app = FastAPI(title="ArkWork API", version="0.1.0")
    app.state.settings = settings
    app.state.chat_service = chat_service or ChatService(settings)
    app.state.midtrans_client = midtrans_client or MidtransClient(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.frontend_origins),
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    allowed_origins = set(settings.frontend_origins)

    @app.middleware("http")
    async def origin_guard_middleware(request: Request, call_next):
        # Key line: requests without Origin (curl, server-to-server) pass; unknown browser origins are refused.
        origin = request.headers.get("origin")
        if origin and origin not in allowed_origins:
            logger.warning("CORS origin rejected origin=%s path=%s", origin, request.url.path)
            return JSONResponse(status_code=403, content={"error": CORS_REJECTED_MESSAGE})
        return await call_next(request)

    @app.middleware("http")
    async def request_log_middleware(request: Request, call_next):
        request_id = bind_request_id(request.headers.get(REQUEST_ID_HEADER))
        logger.info("%s %s", request.method, request.url.path)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException):
        # Key line: unknown routes answer with the same JSON shape as every other error.
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %r", exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "OK"

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    app.include_router(chat_router)
    app.include_router(payments_router)
    return app


_settings = Settings.from_env()
configure_logging(_settings.log_level, app_env=_settings.app_env)

app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Backend listening on http://localhost:%d (APP_ENV=%s)", _settings.port, _settings.app_env)
    logger.info("FRONTEND_ORIGIN(s): %s", ", ".join(_settings.frontend_origins) or "(none)")
    uvicorn.run("arkwork.main:app", host="0.0.0.0", port=_settings.port)
