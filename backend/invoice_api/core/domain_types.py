"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId wraps the integer surrogate key — never reassigned
    - MAX_INVOICE_ID is the largest key the id column can hold (PostgreSQL int4)
    - InvoiceStatus is the closed set of persisted statuses
    - TITLE_MAX_LENGTH is the single source of truth for the title bound

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders, compares equal to the raw value
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", int)
MAX_INVOICE_ID: int = 2**31 - 1


# ─── Constants ───────────────────────────────────────────────────

TITLE_MAX_LENGTH: int = 255
TAG_NAME_MAX_LENGTH: int = 255


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice lifecycle states — maps to DB `status` column."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]
