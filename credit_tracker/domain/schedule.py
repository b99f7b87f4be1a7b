"""Month-by-month display timeline for purchases"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from credit_tracker.domain.allocation import allocate_payments
from credit_tracker.domain.models import AllocationResult, Ledger, Purchase, ScheduleRow
from credit_tracker.domain.planner import first_payment_month, round2, schedule_window
from credit_tracker.utils.date_utils import Month, month_range, months_between

PAID_OFF_EPSILON = Decimal("0.05")


def amount_left(
    purchase: Purchase,
    allocation: AllocationResult,
    epsilon: Decimal = PAID_OFF_EPSILON,
) -> Decimal:
    """Unpaid balance, floored at zero; residues below epsilon count as paid off"""
    left = round2(purchase.amount - allocation.total_paid(purchase.id))
    if left < epsilon:
        return Decimal("0.00")
    return left


def months_elapsed(purchase: Purchase, today: date) -> int:
    return max(0, months_between(purchase.month, Month.of(today)))


def months_remaining(purchase: Purchase, today: date) -> int:
    since_first = max(0, months_between(first_payment_month(purchase.date), Month.of(today)))
    return max(0, purchase.installments - since_first)


def projected_for_month(month: Month, purchases: Iterable[Purchase]) -> Decimal:
    """Planned total due in a month: sum of nominal installments falling in it"""
    total = sum(
        (p.monthly_payment for p in purchases if month in schedule_window(p)),
        Decimal("0"),
    )
    return round2(total)


def build_schedule(
    purchases: List[Purchase],
    ledger: Ledger,
    allocation: Optional[AllocationResult] = None,
    today: Optional[date] = None,
    epsilon: Decimal = PAID_OFF_EPSILON,
) -> List[ScheduleRow]:
    """
    Build the interleaved timeline: one row per purchase per month, from the
    purchase month through the end of its schedule window.

    Row 0 (purchase month) carries identity figures; later rows only carry
    the month, the cash applied to the purchase and the projected total.
    Rows are ordered by month, then purchase date, then purchase id.
    """
    if allocation is None:
        allocation = allocate_payments(purchases, ledger)
    if today is None:
        today = date.today()

    projected_cache: Dict[Month, Decimal] = {}
    rows: List[ScheduleRow] = []

    for purchase in purchases:
        window = schedule_window(purchase)
        for month in month_range(purchase.month, window.last):
            if month not in projected_cache:
                projected_cache[month] = projected_for_month(month, purchases)

            row = ScheduleRow(
                purchase_id=purchase.id,
                purchase_date=purchase.date,
                month=month,
                is_first_row=month == purchase.month,
                amount_paid=round2(allocation.paid_in(purchase.id, month)),
                projected=projected_cache[month],
            )
            if row.is_first_row:
                row.name = purchase.name
                row.amount = purchase.amount
                row.installments = purchase.installments
                row.amount_left = amount_left(purchase, allocation, epsilon)
                row.months_elapsed = months_elapsed(purchase, today)
                row.months_remaining = months_remaining(purchase, today)
            rows.append(row)

    rows.sort(key=lambda r: (r.month, r.purchase_date, r.purchase_id))
    return rows
