"""Invoice Repository — SQLAlchemy implementation of the InvoiceRepository protocol.

Invariants:
    - create sets created_at == updated_at from a single clock reading
    - get_by_id / delete return None for unknown ids (never a placeholder record)
    - ids outside 1..MAX_INVOICE_ID are unknown without a query (the driver
      would reject them as out of range for the column)
    - list applies only the predicates present in InvoiceFilter, AND-combined
    - list order is id ascending (stable across calls)
    - delete is a hard delete; join rows go with the invoice, tags stay

Design Decisions:
    - One repository per request, bound to the request's AsyncSession
    - Commit inside each write: every operation is a single-row transaction
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_api.core.domain_types import InvoiceId, MAX_INVOICE_ID
from invoice_api.core.invoice_filter import InvoiceFilter
from invoice_api.db.base import utc_now
from invoice_api.models.invoice import Invoice

logger = logging.getLogger(__name__)


class SqlInvoiceRepository:
    """Invoice persistence over an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create(self, invoice_data: dict) -> Invoice:
        now = utc_now()
        invoice = Invoice(**invoice_data, created_at=now, updated_at=now)
        self._db.add(invoice)
        await self._db.commit()
        await self._db.refresh(invoice)
        logger.info(
            f"Invoice {invoice.id} created",
            extra={"invoice_id": invoice.id},
        )
        return invoice

    async def get_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        if not 1 <= invoice_id <= MAX_INVOICE_ID:
            return None
        result = await self._db.execute(
            select(Invoice).where(Invoice.id == invoice_id),
        )
        return result.scalar_one_or_none()

    async def list(self, invoice_filter: InvoiceFilter) -> list[Invoice]:
        query = select(Invoice).order_by(Invoice.id.asc())
        if invoice_filter.status is not None:
            query = query.where(Invoice.status == invoice_filter.status)
        if invoice_filter.due_date_from is not None:
            query = query.where(Invoice.due_date >= invoice_filter.due_date_from)
        if invoice_filter.due_date_to is not None:
            query = query.where(Invoice.due_date <= invoice_filter.due_date_to)

        result = await self._db.execute(query)
        return list(result.scalars().all())

    async def delete(self, invoice_id: InvoiceId) -> Invoice | None:
        invoice = await self.get_by_id(invoice_id)
        if invoice is None:
            return None
        await self._db.delete(invoice)
        await self._db.commit()
        logger.info(
            f"Invoice {invoice_id} deleted",
            extra={"invoice_id": invoice_id},
        )
        return invoice
