"""Schedule and summary computation over one (purchases, ledger) snapshot"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from credit_tracker.domain.allocation import allocate_payments
from credit_tracker.domain.models import Ledger, Purchase, ScheduleReport
from credit_tracker.domain.schedule import PAID_OFF_EPSILON, build_schedule
from credit_tracker.domain.summary import summarize


def compute_report(
    purchases: List[Purchase],
    ledger: Ledger,
    credit_limit: Decimal,
    today: Optional[date] = None,
    epsilon: Decimal = PAID_OFF_EPSILON,
) -> ScheduleReport:
    """
    Main entry point: allocate cash, project the timeline and total the debt.

    Pure function of its inputs; nothing is cached between calls.
    """
    allocation = allocate_payments(purchases, ledger)
    rows = build_schedule(purchases, ledger, allocation=allocation, today=today, epsilon=epsilon)
    summary = summarize(purchases, allocation, credit_limit, epsilon)

    return ScheduleReport(allocation=allocation, rows=rows, summary=summary)
