"""Invoice Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - InvoiceCreate: required strings stripped and non-blank, title <= TITLE_MAX_LENGTH chars
    - InvoiceCreate.status is one of InvoiceStatus, exact and case-sensitive
    - Timestamps leave this layer as naive UTC; create due_date drops sub-second precision
    - InvoiceListQuery: blank parameters mean "not supplied"; a date-only
      due_date_to covers its whole day (through 23:59:59.999999)
    - InvoiceResponse mirrors the persisted record field for field (tags excluded)
    - List responses always wrap records in a "data" array, even when empty

Design Decisions:
    - StrictStr over str: numbers and booleans are type errors, never coerced to text
    - Blank required strings raise the "missing" error type, so clients see one
      "required" message whether the key was absent, null, or whitespace
    - Client-facing wording lives in core/validation_messages.py, keyed on error type
    - from_attributes: routes hand ORM objects straight to model_validate
"""

import re
from datetime import datetime, timezone
from typing import Any

from pydantic import (
    BaseModel, ConfigDict, Field, StrictStr, ValidationInfo, field_validator,
)
from pydantic_core import PydanticCustomError

from invoice_api.core.domain_types import InvoiceStatus, TITLE_MAX_LENGTH
from invoice_api.core.validation_messages import DATE_INVALID

INVOICE_DELETED_MESSAGE = "Invoice deleted successfully"

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_END_OF_DAY = "T23:59:59.999999"


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC.

    Offsets that push the instant outside datetime's range (year 1 or 9999)
    are reported as an invalid date instead of overflowing.
    """
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    except OverflowError:
        raise PydanticCustomError(
            DATE_INVALID, "Date is outside the supported range",
        ) from None


# ─── Requests ────────────────────────────────────────────────────

class InvoiceCreate(BaseModel):
    """Invoice creation — every field error is collected in one pass."""
    model_config = ConfigDict(use_enum_values=True)

    invoice_number: StrictStr
    customer_name: StrictStr
    title: StrictStr = Field(max_length=TITLE_MAX_LENGTH)
    description: StrictStr | None = None
    status: InvoiceStatus
    due_date: datetime | None = None

    @field_validator(
        "invoice_number", "customer_name", "title", "status", mode="before",
    )
    @classmethod
    def strip_required(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
        if v is None or v == "":
            raise PydanticCustomError("missing", "Field required")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def blank_description_is_null(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_must_be_text(cls, v: Any) -> Any:
        # Pydantic would read bare numbers as Unix time
        if v is None:
            return None
        if not isinstance(v, str):
            raise PydanticCustomError(DATE_INVALID, "Input should be a date string")
        return v.strip() or None

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc_seconds(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return None
        return to_naive_utc(v).replace(microsecond=0)


class InvoiceListQuery(BaseModel):
    """Query parameters for GET /invoices. Every parameter is optional."""
    status: str | None = None
    due_date_from: datetime | None = None
    due_date_to: datetime | None = None

    @field_validator("status", "due_date_from", "due_date_to", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any, info: ValidationInfo) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            return None
        if info.field_name == "due_date_to" and _DATE_ONLY.match(v):
            return v + _END_OF_DAY
        return v

    @field_validator("due_date_from", "due_date_to")
    @classmethod
    def bound_to_utc(cls, v: datetime | None) -> datetime | None:
        return None if v is None else to_naive_utc(v)


# ─── Responses ───────────────────────────────────────────────────

class InvoiceResponse(BaseModel):
    """Invoice response — public-facing invoice data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    customer_name: str
    title: str
    description: str | None = None
    status: InvoiceStatus
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class InvoiceListResponse(BaseModel):
    """Envelope for GET /invoices."""
    data: list[InvoiceResponse]


class InvoiceDeletedResponse(BaseModel):
    """Confirmation for DELETE /invoices/{id}."""
    message: str = INVOICE_DELETED_MESSAGE
    id: int
