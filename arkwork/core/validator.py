# Role: Input gatekeeper for the chat endpoint. Turns an arbitrary JSON-like body into a typed
# ChatRequest, or into a field-level report of every violation (never just the first one).

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from arkwork.models.chat import ChatRequest


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    request: Optional[BaseModel] = None
    problems: List[Dict[str, Any]] = field(default_factory=list)


def _field_path(loc: tuple) -> str:
    # ("messages", 0, "content") -> "messages.0.content"
    return ".".join(str(part) for part in loc) or "(body)"


def format_validation_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    # Key line: only path/message/type leave the server; raw inputs and pydantic URLs do not.
    return [
        {"field": _field_path(err.get("loc", ())), "message": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors(include_url=False)
    ]


class Validator:
    def __init__(self, model: type = ChatRequest) -> None:
        self.model = model

    def validate(self, payload: Any) -> ValidationResult:
        # 1) Missing body behaves like an empty object
        # 2) Let pydantic collect every violation
        # 3) ok=True only with a fully typed request
        if payload is None:
            payload = {}

        try:
            parsed = self.model.model_validate(payload)
        except ValidationError as exc:
            return ValidationResult(ok=False, problems=format_validation_errors(exc))

        return ValidationResult(ok=True, request=parsed)
