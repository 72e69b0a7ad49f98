# Role: Inbound chat request and outbound answer schemas. Pydantic enforces the request contract
# (non-empty messages, intent enum, generation parameter bounds) and collects every violation at once.

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from arkwork.models.intent import Intent
from arkwork.models.message import ChatMessage
from arkwork.models.user_profile import UserProfile

DEFAULT_MAX_OUTPUT_TOKENS = 512
DEFAULT_TEMPERATURE = 0.3


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(min_length=1)
    intent: Intent = Intent.NEWS
    profile: Optional[UserProfile] = None

    # Key lines: strict so "512" or 0.5 tokens are rejected instead of coerced.
    maxOutputTokens: int = Field(default=DEFAULT_MAX_OUTPUT_TOKENS, ge=64, le=2048, strict=True)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0, le=1, strict=True)

    @property
    def latest_message(self) -> ChatMessage:
        return self.messages[-1]


class ChatAnswer(BaseModel):
    answer: str


class ChatHealth(BaseModel):
    ok: bool = True
    model: str
    hasKey: bool
