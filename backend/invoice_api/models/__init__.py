"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Invoice and Tag are linked only through the invoice_tag join table

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from invoice_api.models.invoice_tag import invoice_tag  # noqa: F401
from invoice_api.models.invoice import Invoice  # noqa: F401
from invoice_api.models.tag import Tag  # noqa: F401
