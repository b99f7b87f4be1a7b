"""/v1/payments - monthly cash ledger"""

import logging
from decimal import Decimal
from typing import Callable, Dict
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from credit_tracker.api.v1.schemas import PaymentReplaceRequest, PaymentRequest
from credit_tracker.api.dependencies import get_request_id
from credit_tracker.infrastructure.database.session import get_db, write_lock
from credit_tracker.infrastructure.database.repositories import LedgerRepository
from credit_tracker.domain.exceptions import InvalidLedgerEntryError
from credit_tracker.domain.ledger import increment_month, parse_month, replace_month
from credit_tracker.domain.models import Ledger
from credit_tracker.utils.date_utils import Month
from credit_tracker.infrastructure.observability.metrics import ledger_update_counter
from credit_tracker.infrastructure.observability.logging import log_ledger_update

router = APIRouter()


def to_response(ledger: Ledger) -> Dict[str, Decimal]:
    return {str(month): ledger[month] for month in sorted(ledger)}


def apply_ledger_update(
    db: Session,
    request_id: str,
    operation: str,
    update: Callable[[Ledger, Month, Decimal], Ledger],
    month: str,
    amount: Decimal,
) -> Dict[str, Decimal]:
    """
    Read-modify-write one ledger month under the write lock.

    Only the target row is read, strictly; a corrupt row elsewhere in the
    ledger does not reset the month being updated.

    Raises:
        HTTPException: 400 on malformed input, 500 if the write fails
    """
    try:
        key = parse_month(month)

        with write_lock:
            repo = LedgerRepository(db)
            entry = update(repo.get_month(key), key, amount)
            repo.set_month(key, entry[key])
            db.commit()

        ledger_update_counter.labels(operation=operation).inc()
        log_ledger_update(request_id, str(key), operation, entry[key])

        return to_response(repo.get_ledger())

    except InvalidLedgerEntryError as e:
        logging.warning(f"Invalid ledger entry: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Failed to update ledger: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/payments", response_model=Dict[str, Decimal])
def list_payments(db: Session = Depends(get_db)):
    """Return month -> total paid, oldest month first"""
    return to_response(LedgerRepository(db).get_ledger())


@router.post("/payments", response_model=Dict[str, Decimal])
def add_payment(
    request_body: PaymentRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Add cash to a month's total and return the full ledger"""
    return apply_ledger_update(
        db, get_request_id(request), "increment", increment_month, request_body.month, request_body.amount
    )


@router.put("/payments/{month}", response_model=Dict[str, Decimal])
def replace_payment(
    month: str,
    request_body: PaymentReplaceRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Overwrite a month's total (clamped at 0) and return the full ledger"""
    return apply_ledger_update(
        db, get_request_id(request), "replace", replace_month, month, request_body.amount
    )
