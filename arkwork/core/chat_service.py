# Role: Orchestrator for one chat request. It glues together:
# credential check, conversation assembly, the single Gemini call, and mapping of every outcome
# (answer / empty answer / provider failure) onto the client-facing contract.
# Stateless: nothing survives between calls.

from __future__ import annotations

import logging
from typing import Optional

from arkwork.config import Settings
from arkwork.core.conversation import build_conversation
from arkwork.core.errors import ErrorCode, ServiceError
from arkwork.llm.gemini_client import GeminiClient, ProviderError
from arkwork.models.chat import ChatRequest
from arkwork.prompts.fallback_prompt import build_greeting

logger = logging.getLogger(__name__)

KEY_MISSING_MESSAGE = "Server AI belum dikonfigurasi. Hubungi admin."
EMPTY_RESPONSE_MESSAGE = "AI tidak mengembalikan teks."
AI_ERROR_MESSAGE = "Gagal meminta jawaban dari AI."


class ChatService:
    def __init__(self, settings: Settings, client: Optional[GeminiClient] = None) -> None:
        # Key line: the client is injectable so tests can stub the provider.
        self.settings = settings
        self.client = client or GeminiClient(settings)

    @property
    def model_name(self) -> str:
        return self.settings.gemini_model

    @property
    def has_key(self) -> bool:
        return self.settings.has_gemini_key

    def ensure_available(self) -> None:
        if not self.has_key:
            raise ServiceError(ErrorCode.GEMINI_API_KEY_MISSING, 503, KEY_MISSING_MESSAGE)

    def answer(self, request: ChatRequest) -> str:
        # 1) Refuse early when no credential is configured (no network call)
        # 2) Build the conversation; blank latest message -> canned greeting
        # 3) Call Gemini once; empty text is a failure, not a success
        # 4) Provider failure -> log details here, return only code + message
        self.ensure_available()

        conversation = build_conversation(request, self.settings)
        if conversation.is_blank:
            return build_greeting()

        logger.debug(
            "chat request intent=%s history_turns=%d max_output_tokens=%d temperature=%s",
            request.intent.value,
            len(conversation.history),
            conversation.max_output_tokens,
            conversation.temperature,
        )

        try:
            text = self.client.send_chat(conversation)
        except ProviderError as e:
            logger.error("[ArkWork Agent] Gemini error: %s", e.log_fields())
            raise ServiceError(
                ErrorCode.AI_ERROR,
                502,
                e.message or AI_ERROR_MESSAGE,
                upstream_code=e.code if e.code is not None else e.status,
            ) from e

        if not text or not text.strip():
            logger.warning("[ArkWork Agent] Gemini returned empty text model=%s", self.model_name)
            raise ServiceError(ErrorCode.EMPTY_RESPONSE, 502, EMPTY_RESPONSE_MESSAGE)

        return text.strip()
