# Role: Chat message schemas. ChatMessage is what the caller sends (conversation order = list order);
# ProviderTurn is the Gemini wire shape produced by the conversation builder and never returned to callers.

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

ProviderRole = Literal["user", "model"]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str = "user"
    content: str = Field(min_length=1)


class TextPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class ProviderTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: ProviderRole
    parts: List[TextPart]

    @classmethod
    def of(cls, role: ProviderRole, text: str) -> "ProviderTurn":
        return cls(role=role, parts=[TextPart(text=text)])

    @property
    def text(self) -> str:
        return "".join(p.text for p in self.parts)
