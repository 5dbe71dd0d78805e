"""Invoice ORM — persists one billing record.

Invariants:
    - id is an autoincrement integer primary key, never reused or reassigned
      (sqlite_autoincrement so SQLite does not hand back the highest freed rowid)
    - status is constrained to InvoiceStatus values at the database level too
    - created_at set once on insert; updated_at advances on every ORM UPDATE
    - due_date is a naive timestamp (no offset stored or returned)

Design Decisions:
    - status as String + CHECK over a native ENUM type: portable across PostgreSQL and SQLite
    - tags loaded with selectin: the ORM must see the collection to clear join rows on delete
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoice_api.core.domain_types import InvoiceStatus, TITLE_MAX_LENGTH
from invoice_api.db.base import Base, utc_now
from invoice_api.models.invoice_tag import invoice_tag

_STATUS_VALUES = ", ".join(f"'{s}'" for s in InvoiceStatus.values())


class Invoice(Base):
    """Invoice entity — the resource exposed under /api/invoices."""
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint(
            f"status IN ({_STATUS_VALUES})", name="invoices_status_check",
        ),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    invoice_number: Mapped[str] = mapped_column(String, nullable=False)
    customer_name: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH), nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True,
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, onupdate=utc_now,
    )

    tags: Mapped[list["Tag"]] = relationship(
        "Tag", secondary=invoice_tag, back_populates="invoices",
        lazy="selectin",
    )
