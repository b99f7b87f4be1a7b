"""GET /v1/schedule and /v1/summary - derived installment timeline and credit usage"""

import time
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from credit_tracker.api.v1.schemas import ScheduleResponse, ScheduleRowSchema, SummaryResponse
from credit_tracker.api.dependencies import get_request_id
from credit_tracker.config import settings
from credit_tracker.domain.models import ScheduleReport, ScheduleRow, Summary
from credit_tracker.domain.report import compute_report
from credit_tracker.infrastructure.database.session import get_db
from credit_tracker.infrastructure.database.repositories import load_snapshot
from credit_tracker.infrastructure.observability.metrics import record_schedule
from credit_tracker.infrastructure.observability.logging import log_schedule_computed

router = APIRouter()


def build_report(db: Session, request_id: str) -> ScheduleReport:
    """Recompute everything from one consistent snapshot of the store"""
    start_time = time.time()

    purchases, ledger = load_snapshot(db)
    report = compute_report(
        purchases,
        ledger,
        credit_limit=settings.credit_limit,
        epsilon=settings.paid_off_epsilon,
    )

    duration = time.time() - start_time
    record_schedule(duration, report.summary.total_remaining_debt)
    log_schedule_computed(request_id, len(report.rows), report.summary.total_remaining_debt, duration * 1000)

    return report


def to_row_schema(row: ScheduleRow) -> ScheduleRowSchema:
    return ScheduleRowSchema(
        purchase_id=row.purchase_id,
        purchase_date=row.purchase_date,
        month=str(row.month),
        month_label=row.month_label,
        is_first_row=row.is_first_row,
        amount_paid=row.amount_paid,
        projected=row.projected,
        name=row.name,
        amount=row.amount,
        installments=row.installments,
        amount_left=row.amount_left,
        months_elapsed=row.months_elapsed,
        months_remaining=row.months_remaining,
    )


def to_summary_schema(summary: Summary) -> SummaryResponse:
    return SummaryResponse(
        credit_limit=summary.credit_limit,
        total_remaining_debt=summary.total_remaining_debt,
        available_credit=summary.available_credit,
        currency=settings.currency,
    )


@router.get("/schedule", response_model=ScheduleResponse)
def get_schedule(request: Request, db: Session = Depends(get_db)):
    """
    Allocate recorded cash to purchases and project the month-by-month timeline.

    Returns:
        Ordered rows, cash applied per purchase per month, and the summary
    """
    report = build_report(db, get_request_id(request))

    allocations = {
        purchase_id: {str(month): amount for month, amount in sorted(months.items())}
        for purchase_id, months in report.allocation.by_month.items()
    }

    return ScheduleResponse(
        rows=[to_row_schema(r) for r in report.rows],
        allocations=allocations,
        total_paid=report.allocation.totals,
        summary=to_summary_schema(report.summary),
    )


@router.get("/summary", response_model=SummaryResponse)
def get_summary(request: Request, db: Session = Depends(get_db)):
    """Total remaining debt and credit still available under the limit"""
    report = build_report(db, get_request_id(request))
    return to_summary_schema(report.summary)
