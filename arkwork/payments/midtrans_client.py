# Role: External adapter for Midtrans Snap. Posts a CreateTransactionPayload to the Snap transactions
# endpoint and returns the typed response (token + redirect_url), or raises PaymentGatewayError.
# One call per request, no retries.

from __future__ import annotations

import logging
from typing import List, Optional

import requests
from pydantic import ValidationError

from arkwork.config import Settings
from arkwork.payments.models import CreateTransactionPayload, CreateTransactionResponse

logger = logging.getLogger(__name__)


class PaymentGatewayError(Exception):
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_messages: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_messages = error_messages or []


def _error_messages(resp: requests.Response) -> List[str]:
    # Midtrans error format: {"error_messages": ["..."]}
    try:
        payload = resp.json()
    except ValueError:
        logger.warning("non-json midtrans error status=%s", resp.status_code)
        return []
    messages = payload.get("error_messages") if isinstance(payload, dict) else None
    if not isinstance(messages, list):
        return []
    return [str(m) for m in messages]


class MidtransClient:
    SANDBOX_URL = "https://app.sandbox.midtrans.com/snap/v1/transactions"
    PRODUCTION_URL = "https://app.midtrans.com/snap/v1/transactions"

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def has_key(self) -> bool:
        return self.settings.has_midtrans_key

    @property
    def is_production(self) -> bool:
        return self.settings.midtrans_is_production

    @property
    def transactions_url(self) -> str:
        return self.PRODUCTION_URL if self.is_production else self.SANDBOX_URL

    def create_transaction(self, payload: CreateTransactionPayload) -> CreateTransactionResponse:
        # 1) Require a server key
        # 2) POST JSON with basic auth (server_key as username, empty password)
        # 3) Non-2xx -> PaymentGatewayError with the gateway's first error message
        # 4) Validate token + redirect_url in the response
        if not self.has_key:
            raise PaymentGatewayError("Missing MIDTRANS_SERVER_KEY")

        order_id = payload.transaction_details.order_id

        try:
            r = self.session.post(
                self.transactions_url,
                json=payload.to_wire(),
                auth=(self.settings.midtrans_server_key, ""),
                headers={"Accept": "application/json"},
                timeout=self.settings.midtrans_timeout_seconds,
            )
        except requests.Timeout as e:
            raise PaymentGatewayError("Payment gateway timeout") from e
        except requests.RequestException as e:
            raise PaymentGatewayError(f"Payment gateway request failed: {e}") from e

        if not 200 <= r.status_code < 300:
            messages = _error_messages(r)
            logger.warning(
                "midtrans error order_id=%s status=%s messages=%s", order_id, r.status_code, messages
            )
            raise PaymentGatewayError(
                messages[0] if messages else "Payment gateway error",
                status_code=r.status_code,
                error_messages=messages,
            )

        try:
            result = CreateTransactionResponse.model_validate(r.json())
        except (ValueError, ValidationError) as e:
            raise PaymentGatewayError(
                "Payment gateway returned an unexpected response", status_code=r.status_code
            ) from e

        logger.info("midtrans transaction created order_id=%s", order_id)
        return result
