# Role: Client-facing error contract. Every failure leaves the API as one ServiceError with a stable
# machine-readable code, an HTTP status, and a human-readable message. Nothing else crosses the boundary.

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Union


class ErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    GEMINI_API_KEY_MISSING = "GEMINI_API_KEY_MISSING"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"
    AI_ERROR = "AI_ERROR"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    MIDTRANS_SERVER_KEY_MISSING = "MIDTRANS_SERVER_KEY_MISSING"
    PAYMENT_ERROR = "PAYMENT_ERROR"


class ServiceError(Exception):
    def __init__(
        self,
        code: ErrorCode,
        status_code: int,
        message: Optional[str] = None,
        *,
        details: Any = None,
        upstream_code: Optional[Union[str, int]] = None,
    ) -> None:
        super().__init__(message or code.value)
        self.code = code
        self.status_code = status_code
        self.message = message
        self.details = details
        self.upstream_code = upstream_code

    def to_body(self) -> Dict[str, Any]:
        # Key line: optional keys are omitted entirely rather than sent as null.
        body: Dict[str, Any] = {"error": self.code.value}
        if self.upstream_code is not None:
            body["code"] = self.upstream_code
        if self.message is not None:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


def bad_request(details: Any) -> ServiceError:
    return ServiceError(ErrorCode.BAD_REQUEST, 400, details=details)
