# Role: Local developer CLI to talk to ChatService without the web API or UI.
# The service is stateless, so this loop keeps the message history itself and resends it every turn.

from __future__ import annotations

from typing import Dict, List

import arkwork.config
arkwork.config.load_env()

from arkwork.config import Settings
from arkwork.core.chat_service import ChatService
from arkwork.core.errors import ServiceError
from arkwork.core.validator import Validator
from arkwork.logging_config import configure_logging
from arkwork.models.chat import ChatRequest
from arkwork.models.intent import Intent

_INTENTS = {i.value for i in Intent}


def main() -> None:
    # 1) Build Settings + ChatService once
    # 2) Keep history and intent locally across turns
    # 3) Route user input -> ChatService -> print answer or error code
    settings = Settings.from_env()
    configure_logging(settings.log_level, app_env=settings.app_env)

    print("ArkWork Agent CLI")
    print("Commands: /new (clear history), /intent news|jobs|consult, /exit")
    print("-" * 50)

    service = ChatService(settings)
    validator = Validator(ChatRequest)
    history: List[Dict[str, str]] = []
    intent = Intent.NEWS.value
    print(f"model: {settings.gemini_model}  intent: {intent}  hasKey: {settings.has_gemini_key}")

    while True:
        try:
            user_message = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_message:
            continue

        cmd = user_message.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd in {"/new", "new"}:
            history = []
            print("History cleared.")
            continue

        if cmd.startswith("/intent"):
            parts = cmd.split()
            if len(parts) == 2 and parts[1] in _INTENTS:
                intent = parts[1]
                print(f"intent: {intent}")
            else:
                print(f"Usage: /intent {'|'.join(sorted(_INTENTS))}")
            continue

        history.append({"role": "user", "content": user_message})
        result = validator.validate({"messages": history, "intent": intent})
        if not result.ok:
            print(f"\n[BAD_REQUEST] {result.problems}")
            history.pop()
            continue

        try:
            answer = service.answer(result.request)
        except ServiceError as e:
            print(f"\n[{e.code.value}] {e.message or ''}")
            history.pop()
            continue

        history.append({"role": "assistant", "content": answer})
        print(f"\nAssistant: {answer}")


if __name__ == "__main__":
    main()
