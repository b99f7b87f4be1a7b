"""/v1/purchases - record and list credit card purchases"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from credit_tracker.api.v1.schemas import PurchaseRequest, PurchaseResponse
from credit_tracker.api.dependencies import get_request_id
from credit_tracker.infrastructure.database.session import get_db, write_lock
from credit_tracker.infrastructure.database.repositories import PurchaseRepository
from credit_tracker.domain.exceptions import InvalidPurchaseError
from credit_tracker.domain.models import Purchase
from credit_tracker.domain.planner import plan_purchase
from credit_tracker.infrastructure.observability.metrics import record_purchase
from credit_tracker.infrastructure.observability.logging import log_purchase_created

router = APIRouter()


def to_response(purchase: Purchase) -> PurchaseResponse:
    return PurchaseResponse(
        id=purchase.id,
        name=purchase.name,
        amount=purchase.amount,
        date=purchase.date,
        installments=purchase.installments,
        monthly_payment=purchase.monthly_payment,
    )


@router.get("/purchases", response_model=List[PurchaseResponse])
def list_purchases(db: Session = Depends(get_db)):
    """Return every stored purchase in insertion order"""
    purchases = PurchaseRepository(db).list_purchases()
    return [to_response(p) for p in purchases]


@router.post("/purchases", response_model=PurchaseResponse, status_code=201)
def create_purchase(
    request_body: PurchaseRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Record a purchase and snapshot its installment plan.

    Flow:
    1. Validate name and amount
    2. Classify amount into an installment tier, derive monthly payment
    3. Persist the purchase
    """
    request_id = get_request_id(request)

    try:
        purchase = plan_purchase(request_body.name, request_body.amount, request_body.date)

        with write_lock:
            PurchaseRepository(db).add_purchase(purchase)
            db.commit()

        record_purchase(purchase.installments)
        log_purchase_created(request_id, purchase.id, purchase.installments, purchase.monthly_payment)

        return to_response(purchase)

    except InvalidPurchaseError as e:
        logging.warning(f"Invalid purchase: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Failed to store purchase: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
