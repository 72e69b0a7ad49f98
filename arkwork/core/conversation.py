# Role: Prompt assembler. Turns a validated ChatRequest into the Gemini conversation:
# synthetic system turn + "ready" acknowledgement + bounded history window, plus the current user turn
# which is sent separately as the new message.
#
# Both limits are lossy on purpose (token cost): older turns beyond the window are dropped and any text
# longer than max_chars is cut to its prefix. Neither raises.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from arkwork.config import Settings
from arkwork.models.chat import ChatRequest
from arkwork.models.message import ChatMessage, ProviderTurn
from arkwork.prompts.system_prompt import build_system_prompt

DEFAULT_MAX_CHARS = 4000
DEFAULT_HISTORY_WINDOW = 6
ACKNOWLEDGEMENT = "Siap."


@dataclass(frozen=True)
class Conversation:
    system_instruction: str
    history: List[ProviderTurn]
    user_message: str
    max_output_tokens: int
    temperature: float

    @property
    def is_blank(self) -> bool:
        return not self.user_message.strip()


def clamp_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    # Silent prefix truncation.
    if not text:
        return ""
    return text[:max_chars] if len(text) > max_chars else text


def to_provider_role(role: str) -> str:
    return "model" if role == "assistant" else "user"


def to_provider_history(
    messages: Sequence[ChatMessage],
    keep: int = DEFAULT_HISTORY_WINDOW,
    max_chars: int = DEFAULT_MAX_CHARS,
) -> List[ProviderTurn]:
    # 1) Take the last `keep` messages (window first, filter second)
    # 2) Drop blank entries
    # 3) Map roles and clamp text
    recent = list(messages[-keep:]) if keep > 0 else []
    return [
        ProviderTurn.of(to_provider_role(m.role), clamp_text(m.content, max_chars))
        for m in recent
        if m.content and m.content.strip()
    ]


def build_conversation(request: ChatRequest, settings: Settings) -> Conversation:
    system = build_system_prompt(request.intent, request.profile)

    # Key lines: Gemini chat history has no system slot, so the instruction rides in a user turn
    # followed by a fixed model acknowledgement.
    history = [
        ProviderTurn.of("user", system),
        ProviderTurn.of("model", ACKNOWLEDGEMENT),
    ]
    history.extend(
        to_provider_history(
            request.messages[:-1],
            keep=settings.history_window,
            max_chars=settings.max_text_chars,
        )
    )

    return Conversation(
        system_instruction=system,
        history=history,
        user_message=clamp_text(request.latest_message.content, settings.max_text_chars),
        max_output_tokens=request.maxOutputTokens,
        temperature=request.temperature,
    )
