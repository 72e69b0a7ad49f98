# Role: Minimal wrapper around the Gemini chat API. Centralizes model name, timeout, and error handling,
# so the rest of the code calls a single method: send_chat(conversation).
# Every SDK/transport failure is converted into one ProviderError at this boundary.

from __future__ import annotations

import logging
from typing import List, Optional, Union

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

import arkwork.config as config
from arkwork.config import Settings
from arkwork.core.conversation import Conversation
from arkwork.models.message import ProviderTurn

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Tagged upstream failure: what Gemini (or the transport) said, nothing more."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[Union[str, int]] = None,
        status: Optional[Union[str, int]] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.name = name or type(self).__name__

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ProviderError":
        if isinstance(exc, genai_errors.APIError):
            return cls(
                getattr(exc, "message", None) or str(exc),
                code=getattr(exc, "code", None),
                status=getattr(exc, "status", None),
                name=type(exc).__name__,
            )
        return cls(
            str(exc) or type(exc).__name__,
            code=getattr(exc, "code", None),
            status=getattr(exc, "status", None) or getattr(exc, "status_code", None),
            name=type(exc).__name__,
        )

    def log_fields(self) -> dict:
        return {"message": self.message, "code": self.code, "status": self.status, "name": self.name}


def to_contents(turns: List[ProviderTurn]) -> List[types.Content]:
    return [
        types.Content(role=t.role, parts=[types.Part(text=p.text) for p in t.parts])
        for t in turns
    ]


class GeminiClient:
    def __init__(self, settings: Settings, client: Optional[genai.Client] = None) -> None:
        # Key lines:
        # - Credentials and model come from the injected Settings, never from os.environ here.
        # - The SDK client is created lazily so a missing key does not crash startup.
        self.settings = settings
        self.model_name = settings.gemini_model
        self._client = client

    @property
    def has_key(self) -> bool:
        return self.settings.has_gemini_key

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.has_key:
                raise ProviderError("Missing GEMINI_API_KEY", name="ConfigurationError")
            self._client = genai.Client(
                api_key=self.settings.gemini_api_key,
                # HttpOptions.timeout is in milliseconds.
                http_options=types.HttpOptions(timeout=self.settings.gemini_timeout_seconds * 1000),
            )
        return self._client

    def send_chat(self, conversation: Conversation) -> str:
        # 1) Start a chat seeded with the assembled history
        # 2) Send the current user turn (exactly one upstream call)
        # 3) Return raw text; emptiness is judged by the caller
        try:
            chat = self._get_client().chats.create(
                model=self.model_name,
                history=to_contents(conversation.history),
                config=types.GenerateContentConfig(
                    max_output_tokens=conversation.max_output_tokens,
                    temperature=conversation.temperature,
                ),
            )
            resp = chat.send_message(conversation.user_message)
            text = getattr(resp, "text", None) or ""
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError.from_exception(e) from e

        if config.DEBUG:
            preview = text.strip()
            logger.debug(
                "gemini response model=%s history_turns=%d chars=%d preview=%r",
                self.model_name,
                len(conversation.history),
                len(preview),
                preview[:600],
            )

        return text
