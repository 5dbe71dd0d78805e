"""Invoice Routes — list, fetch, create, and delete over /api/invoices.

Invariants:
    - Routes are stateless: one request, one repository call, one response
    - Create bodies pass InvoiceCreate before any write; list params pass InvoiceListQuery
    - Unknown ids raise ResourceNotFoundError (404 via global handler), including
      ids no row could ever hold
    - List always answers {"data": [...]}, even when nothing matches

Design Decisions:
    - Request shape checked by Pydantic (all field errors in one 422);
      api/error_handlers.py owns the wording
    - Repository injected via Depends: tests swap the DB, not the route
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_api.core.domain_types import InvoiceId
from invoice_api.core.errors import ErrorContext, ResourceNotFoundError
from invoice_api.core.invoice_filter import InvoiceFilter
from invoice_api.core.repository_protocols import InvoiceLike, InvoiceRepository
from invoice_api.infrastructure.database import get_db
from invoice_api.schemas.invoice import (
    InvoiceCreate, InvoiceDeletedResponse, InvoiceListQuery,
    InvoiceListResponse, InvoiceResponse,
)
from invoice_api.services.invoice_repository import SqlInvoiceRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/invoices", tags=["invoices"])


def get_invoice_repository(
    db: AsyncSession = Depends(get_db),
) -> InvoiceRepository:
    return SqlInvoiceRepository(db)


def _not_found(invoice_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Invoice", str(invoice_id), ErrorContext(invoice_id=invoice_id),
    )


async def get_invoice_or_404(
    invoice_id: int, repository: InvoiceRepository,
) -> InvoiceLike:
    """Get invoice or raise 404."""
    invoice = await repository.get_by_id(InvoiceId(invoice_id))
    if invoice is None:
        raise _not_found(invoice_id)
    return invoice


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    query: Annotated[InvoiceListQuery, Query()],
    repository: InvoiceRepository = Depends(get_invoice_repository),
):
    """List invoices, optionally filtered by status and an inclusive due-date window."""
    invoices = await repository.list(InvoiceFilter(**query.model_dump()))
    return InvoiceListResponse(
        data=[InvoiceResponse.model_validate(inv) for inv in invoices],
    )


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: int,
    repository: InvoiceRepository = Depends(get_invoice_repository),
):
    """Get a single invoice."""
    invoice = await get_invoice_or_404(invoice_id, repository)
    return InvoiceResponse.model_validate(invoice)


@router.post(
    "", response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    body: InvoiceCreate,
    repository: InvoiceRepository = Depends(get_invoice_repository),
):
    """Create an invoice. All field errors are reported together (422)."""
    invoice = await repository.create(body.model_dump())
    return InvoiceResponse.model_validate(invoice)


@router.delete("/{invoice_id}", response_model=InvoiceDeletedResponse)
async def delete_invoice(
    invoice_id: int,
    repository: InvoiceRepository = Depends(get_invoice_repository),
):
    """Hard-delete an invoice and answer with its id."""
    invoice = await repository.delete(InvoiceId(invoice_id))
    if invoice is None:
        raise _not_found(invoice_id)
    return InvoiceDeletedResponse(id=invoice.id)
