# Role: Thin HTTP adapter for Midtrans Snap transactions. Same error contract as the chat endpoint:
# missing server key -> 503, invalid payload -> 400, any gateway failure -> 502 PAYMENT_ERROR.

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from arkwork.api.deps import get_midtrans_client, read_json_body
from arkwork.core.errors import ErrorCode, ServiceError, bad_request
from arkwork.core.validator import Validator
from arkwork.payments.midtrans_client import MidtransClient, PaymentGatewayError
from arkwork.payments.models import CreateTransactionPayload, PaymentsHealth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])

_validator = Validator(CreateTransactionPayload)

KEY_MISSING_MESSAGE = "Payment gateway belum dikonfigurasi. Hubungi admin."


@router.get("", response_model=PaymentsHealth)
def payments_health(client: MidtransClient = Depends(get_midtrans_client)) -> PaymentsHealth:
    return PaymentsHealth(ok=True, isProduction=client.is_production, hasKey=client.has_key)


@router.post("/transactions", status_code=201)
async def create_transaction(request: Request, client: MidtransClient = Depends(get_midtrans_client)):
    # 1) Server key check, 2) validate payload, 3) forward once to Snap
    try:
        if not client.has_key:
            raise ServiceError(ErrorCode.MIDTRANS_SERVER_KEY_MISSING, 503, KEY_MISSING_MESSAGE)

        result = _validator.validate(await read_json_body(request))
        if not result.ok:
            raise bad_request(result.problems)

        try:
            created = await run_in_threadpool(client.create_transaction, result.request)
        except PaymentGatewayError as e:
            logger.error(
                "midtrans create_transaction failed: %s",
                {"message": e.message, "status": e.status_code, "error_messages": e.error_messages},
            )
            raise ServiceError(ErrorCode.PAYMENT_ERROR, 502, e.message, upstream_code=e.status_code) from e
    except ServiceError as exc:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    return JSONResponse(status_code=201, content=created.model_dump(mode="json"))
