"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from credit_tracker.utils.date_utils import Month

# month -> total cash paid that month across all purchases
Ledger = Dict[Month, Decimal]


@dataclass(frozen=True)
class Purchase:
    """Credit card purchase with its installment plan snapshotted at creation"""

    id: str
    name: str
    amount: Decimal
    date: date
    installments: int
    monthly_payment: Decimal

    @property
    def month(self) -> Month:
        return Month.of(self.date)


@dataclass(frozen=True)
class ScheduleWindow:
    """Inclusive span of months during which installments fall due"""

    first: Month
    last: Month

    def __contains__(self, month: Month) -> bool:
        return self.first <= month <= self.last


@dataclass
class AllocationResult:
    """Cash applied per purchase per month, plus per-purchase totals"""

    by_month: Dict[str, Dict[Month, Decimal]] = field(default_factory=dict)
    totals: Dict[str, Decimal] = field(default_factory=dict)

    def paid_in(self, purchase_id: str, month: Month) -> Decimal:
        return self.by_month.get(purchase_id, {}).get(month, Decimal("0"))

    def total_paid(self, purchase_id: str) -> Decimal:
        return self.totals.get(purchase_id, Decimal("0"))


@dataclass
class ScheduleRow:
    """
    One (purchase, month) pair in the display timeline.

    Identity fields (name through months_remaining) are only set on the row
    in the purchase's own month; later rows leave them as None.
    """

    purchase_id: str
    purchase_date: date
    month: Month
    is_first_row: bool
    amount_paid: Decimal
    projected: Decimal
    name: Optional[str] = None
    amount: Optional[Decimal] = None
    installments: Optional[int] = None
    amount_left: Optional[Decimal] = None
    months_elapsed: Optional[int] = None
    months_remaining: Optional[int] = None

    @property
    def month_label(self) -> str:
        return self.month.label


@dataclass
class Summary:
    """Credit usage totals"""

    credit_limit: Decimal
    total_remaining_debt: Decimal
    available_credit: Decimal


@dataclass
class ScheduleReport:
    """Everything derived from one (purchases, ledger) snapshot"""

    allocation: AllocationResult
    rows: List[ScheduleRow]
    summary: Summary
