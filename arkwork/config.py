# Role: Central configuration module. Loads .env into environment variables, computes runtime flags (DEBUG),
# and builds the Settings object that is injected into the chat and payment services at startup.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

DEBUG: bool = False

_TRUTHY = {"1", "true", "yes", "on"}


def load_env() -> None:
    """
    Load .env into os.environ, then recompute DEBUG.
    This makes DEBUG correct even if load_env() is called after import.
    """
    global DEBUG
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(s.strip() for s in raw.split(",") if s.strip())


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_timeout_seconds: int = 30

    # Lossy cost controls: prior turns forwarded and per-text character clamp.
    history_window: int = 6
    max_text_chars: int = 4000

    frontend_origins: Tuple[str, ...] = ("http://localhost:3000",)
    max_body_bytes: int = 2 * 1024 * 1024

    midtrans_server_key: str = ""
    midtrans_is_production: bool = False
    midtrans_timeout_seconds: int = 15

    app_env: str = "development"
    log_level: str = "INFO"
    port: int = 4000

    @property
    def has_gemini_key(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def has_midtrans_key(self) -> bool:
        return bool(self.midtrans_server_key)

    @classmethod
    def from_env(cls) -> "Settings":
        # Key line: read once at startup; everything downstream receives this object.
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
            gemini_model=os.getenv("GEMINI_MODEL", "").strip() or cls.gemini_model,
            gemini_timeout_seconds=_env_int("GEMINI_TIMEOUT_SECONDS", cls.gemini_timeout_seconds),
            history_window=_env_int("CHAT_HISTORY_WINDOW", cls.history_window),
            max_text_chars=_env_int("CHAT_MAX_TEXT_CHARS", cls.max_text_chars),
            frontend_origins=_split_origins(os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")),
            max_body_bytes=_env_int("MAX_BODY_BYTES", cls.max_body_bytes),
            midtrans_server_key=os.getenv("MIDTRANS_SERVER_KEY", "").strip(),
            midtrans_is_production=os.getenv("MIDTRANS_IS_PRODUCTION", "false").lower() in _TRUTHY,
            midtrans_timeout_seconds=_env_int("MIDTRANS_TIMEOUT_SECONDS", cls.midtrans_timeout_seconds),
            app_env=os.getenv("APP_ENV", "development"),
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper(),
            port=_env_int("PORT", cls.port),
        )
