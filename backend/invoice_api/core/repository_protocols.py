"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Not-found is an explicit None result, never a default/empty record
    - create receives already-validated, normalized field values

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, the core functions feeding them stay sync
"""

from datetime import datetime
from typing import Protocol

from invoice_api.core.domain_types import InvoiceId
from invoice_api.core.invoice_filter import InvoiceFilter


class InvoiceLike(Protocol):
    """Structural contract for Invoice records handed back to routes.

    Avoids coupling routes to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: int
    invoice_number: str
    customer_name: str
    title: str
    description: str | None
    status: str
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime


class InvoiceRepository(Protocol):
    """Contract for invoice persistence — implemented by shell."""
    async def create(self, invoice_data: dict) -> InvoiceLike: ...
    async def get_by_id(self, invoice_id: InvoiceId) -> InvoiceLike | None: ...
    async def list(self, invoice_filter: InvoiceFilter) -> list[InvoiceLike]: ...
    async def delete(self, invoice_id: InvoiceId) -> InvoiceLike | None: ...
