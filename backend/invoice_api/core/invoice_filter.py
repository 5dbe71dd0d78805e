"""Invoice List Filter — the predicate set handed to InvoiceRepository.list.

Invariants:
    - Only set fields constrain; None means "no constraint", never "match empty"
    - Both due-date bounds are inclusive and already normalized to naive UTC
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class InvoiceFilter:
    """Optional list predicates. All set fields must match."""
    status: str | None = None
    due_date_from: datetime | None = None
    due_date_to: datetime | None = None
