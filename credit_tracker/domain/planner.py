"""Installment plan derivation for credit card purchases"""

import uuid
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from credit_tracker.domain.exceptions import InvalidPurchaseError
from credit_tracker.domain.models import Purchase, ScheduleWindow
from credit_tracker.utils.date_utils import Month

CENT = Decimal("0.01")

# (inclusive upper bound, installments); amounts above the last bound get 24
INSTALLMENT_TIERS: List[Tuple[Decimal, int]] = [
    (Decimal("100"), 0),
    (Decimal("300"), 3),
    (Decimal("600"), 6),
    (Decimal("1200"), 9),
    (Decimal("1800"), 12),
    (Decimal("2400"), 18),
]
MAX_INSTALLMENTS = 24


def round2(value: Decimal) -> Decimal:
    """Round to cents, half away from zero"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def classify(amount: Decimal) -> int:
    """
    Map purchase amount to installment count.

    Tiers (upper bound inclusive):
    - <= 100:       0 (due in full, no schedule)
    - 100 - 300:    3
    - 300 - 600:    6
    - 600 - 1200:   9
    - 1200 - 1800:  12
    - 1800 - 2400:  18
    - > 2400:       24
    """
    for upper_bound, installments in INSTALLMENT_TIERS:
        if amount <= upper_bound:
            return installments
    return MAX_INSTALLMENTS


def monthly_payment(amount: Decimal, installments: int) -> Decimal:
    """
    Nominal payment per installment, rounded to cents.

    The rounding remainder is not reconciled on the last installment, so
    monthly_payment * installments may differ from amount by up to
    half a cent per installment.
    """
    if installments <= 0:
        return Decimal("0")
    return round2(amount / installments)


def first_payment_month(purchase_date: date) -> Month:
    """First installment falls due the month after the purchase"""
    return Month.of(purchase_date).add(1)


def schedule_window(purchase: Purchase) -> ScheduleWindow:
    """Months in which the purchase's installments fall due (purchase month if none)"""
    if purchase.installments <= 0:
        return ScheduleWindow(purchase.month, purchase.month)
    first = first_payment_month(purchase.date)
    return ScheduleWindow(first, first.add(purchase.installments - 1))


def plan_purchase(
    name: str,
    amount: Decimal,
    purchase_date: Optional[date] = None,
    purchase_id: Optional[str] = None,
) -> Purchase:
    """
    Validate a purchase submission and snapshot its installment plan.

    Raises:
        InvalidPurchaseError: If the name is empty or the amount is not positive
    """
    name = (name or "").strip()
    if not name:
        raise InvalidPurchaseError("name is required")
    if amount is None or amount <= 0:
        raise InvalidPurchaseError("amount must be positive")

    amount = Decimal(amount)
    installments = classify(amount)

    return Purchase(
        id=purchase_id or str(uuid.uuid4()),
        name=name,
        amount=amount,
        date=purchase_date or date.today(),
        installments=installments,
        monthly_payment=monthly_payment(amount, installments),
    )
