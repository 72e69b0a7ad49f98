# Role: Data contract for Midtrans Snap transaction creation. Field names follow the gateway's JSON
# verbatim; unknown gateway fields are tolerated on both the payload and the response.
# gross_amount is NOT checked against the item lines here; that is the caller's responsibility.

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt

# Key line: whole-number amounts (IDR) must reach Snap as JSON integers, not 150000.0.
Amount = Union[StrictInt, float]


class TransactionDetails(BaseModel):
    order_id: str = Field(min_length=1)
    gross_amount: Amount


class ItemDetail(BaseModel):
    id: Optional[str] = None
    price: Amount
    quantity: int
    name: str


class CustomerDetails(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CreditCardOptions(BaseModel):
    secure: Optional[bool] = None


class Callbacks(BaseModel):
    finish: Optional[str] = None
    pending: Optional[str] = None
    error: Optional[str] = None


class CreateTransactionPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    transaction_details: TransactionDetails
    item_details: Optional[List[ItemDetail]] = None
    customer_details: Optional[CustomerDetails] = None
    enabled_payments: Optional[List[str]] = None
    credit_card: Optional[CreditCardOptions] = None
    callbacks: Optional[Callbacks] = None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class CreateTransactionResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    token: str
    redirect_url: str


class PaymentsHealth(BaseModel):
    ok: bool = True
    isProduction: bool
    hasKey: bool
