"""Credit usage summary"""

from decimal import Decimal
from typing import Iterable

from credit_tracker.domain.models import AllocationResult, Purchase, Summary
from credit_tracker.domain.planner import round2
from credit_tracker.domain.schedule import PAID_OFF_EPSILON, amount_left


def total_remaining_debt(
    purchases: Iterable[Purchase],
    allocation: AllocationResult,
    epsilon: Decimal = PAID_OFF_EPSILON,
) -> Decimal:
    total = sum((amount_left(p, allocation, epsilon) for p in purchases), Decimal("0"))
    return round2(total)


def summarize(
    purchases: Iterable[Purchase],
    allocation: AllocationResult,
    credit_limit: Decimal,
    epsilon: Decimal = PAID_OFF_EPSILON,
) -> Summary:
    """Remaining debt across purchases and the credit still available under the limit"""
    remaining = total_remaining_debt(purchases, allocation, epsilon)
    return Summary(
        credit_limit=credit_limit,
        total_remaining_debt=remaining,
        available_credit=max(Decimal("0.00"), round2(credit_limit - remaining)),
    )
