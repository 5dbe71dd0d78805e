"""invoice_tag join table — the two foreign keys and nothing else.

Both FKs cascade on delete so removing an invoice (or tag) at the SQL level
never leaves dangling join rows.
"""

from sqlalchemy import Column, ForeignKey, Integer, Table

from invoice_api.db.base import Base

invoice_tag = Table(
    "invoice_tag",
    Base.metadata,
    Column(
        "invoice_id", Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "tag_id", Integer,
        ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True,
    ),
)
