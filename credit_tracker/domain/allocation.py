"""Waterfall allocation of monthly cash across purchase debts"""

from decimal import Decimal
from typing import Dict, Iterable, List

from credit_tracker.domain.models import AllocationResult, Ledger, Purchase
from credit_tracker.domain.planner import first_payment_month, round2, schedule_window
from credit_tracker.utils.date_utils import Month

ZERO = Decimal("0")


def precedence_order(purchases: Iterable[Purchase]) -> List[Purchase]:
    """Oldest debt first: by first payment month, then purchase date, then id"""
    return sorted(
        purchases,
        key=lambda p: (first_payment_month(p.date), p.date, p.id),
    )


def per_month_cap(purchase: Purchase, debt: Decimal) -> Decimal:
    """
    Most a purchase can receive in a single month: its nominal installment.

    Purchases due in full (no installments) have the whole outstanding debt
    as their nominal installment.
    """
    if purchase.installments > 0:
        return purchase.monthly_payment
    return debt


def allocate_payments(purchases: Iterable[Purchase], ledger: Ledger) -> AllocationResult:
    """
    Distribute each month's cash across purchases in precedence order.

    Rules:
    - Months are processed chronologically; non-positive months are skipped
    - A purchase only receives cash in months inside its schedule window
    - Per step: min(remaining cash, outstanding debt, per-month cap)
    - Cash left with no eligible purchase stays unattributed
    - Totals are summed exactly and rounded to cents once, at the end
    """
    ordered = precedence_order(purchases)
    windows = {p.id: schedule_window(p) for p in ordered}

    by_month: Dict[str, Dict[Month, Decimal]] = {p.id: {} for p in ordered}
    allocated: Dict[str, Decimal] = {p.id: ZERO for p in ordered}

    for month in sorted(ledger):
        remaining = ledger[month]
        if remaining <= 0:
            continue

        for purchase in ordered:
            if remaining <= 0:
                break
            if month not in windows[purchase.id]:
                continue

            debt = purchase.amount - allocated[purchase.id]
            if debt <= 0:
                continue

            applied = min(remaining, debt, per_month_cap(purchase, debt))
            if applied <= 0:
                continue

            by_month[purchase.id][month] = by_month[purchase.id].get(month, ZERO) + applied
            allocated[purchase.id] += applied
            remaining -= applied

    totals = {purchase_id: round2(total) for purchase_id, total in allocated.items()}
    return AllocationResult(by_month=by_month, totals=totals)
