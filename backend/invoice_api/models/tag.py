"""Tag ORM — named label, many-to-many with invoices via invoice_tag.

Invariants:
    - name is non-nullable
    - deleting an invoice never deletes its tags, only the join rows
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoice_api.core.domain_types import TAG_NAME_MAX_LENGTH
from invoice_api.db.base import Base, utc_now
from invoice_api.models.invoice_tag import invoice_tag


class Tag(Base):
    """Tag entity — no API surface, storage only."""
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(TAG_NAME_MAX_LENGTH), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, onupdate=utc_now,
    )

    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice", secondary=invoice_tag, back_populates="tags",
    )
