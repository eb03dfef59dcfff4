from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Any


class ContactSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    tax_id: str | None = None


class ChildSchema(BaseModel):
    name: str
    photo_url: str | None = None


class SelectionUpdateSchema(BaseModel):
    recipient_count: int | None = None
    add_on_ids: list[str] | None = None
    toggle_add_on: str | None = None
    photo_count: int | None = None
    contact: ContactSchema | None = None
    region: str | None = None
    children: list[ChildSchema] | None = None
    photo_urls: list[str] | None = None
    message: str | None = None


class SelectionSchema(BaseModel):
    recipient_count: int
    add_on_ids: list[str]
    photo_count: int
    contact: ContactSchema
    region: str
    children: list[ChildSchema] = Field(default_factory=list)
    photo_urls: list[str] = Field(default_factory=list)
    message: str = ""


class LineItemSchema(BaseModel):
    id: str
    label: str
    unit_price: Decimal
    original_price: Decimal | None = None
    quantity: int | None = None
    amount: Decimal


class PricingResponseSchema(BaseModel):
    provider: str
    currency: str
    items: list[LineItemSchema]
    base_price: Decimal
    add_on_total: Decimal
    photo_total: Decimal
    bundle_discount: Decimal
    subtotal: Decimal
    total: Decimal
    summary: dict[str, Any] = Field(default_factory=dict)


class StepSchema(BaseModel):
    step: int = Field(ge=1)


class AttributionRequestSchema(BaseModel):
    params: dict[str, Any] = Field(default_factory=dict)


class AttributionResponseSchema(BaseModel):
    params: dict[str, Any]
    captured_at: float | None = None


class CheckoutResponseSchema(BaseModel):
    url: str
    provider: str
    endpoint_id: str
    total: Decimal
    currency: str
