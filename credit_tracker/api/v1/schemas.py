"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
import datetime
from decimal import Decimal
from typing import Dict, List, Optional


class PurchaseRequest(BaseModel):
    """Request body for POST /v1/purchases"""

    name: str = Field(..., min_length=1, description="What was bought")
    amount: Decimal = Field(..., gt=0, decimal_places=2, description="Purchase amount")
    date: Optional[datetime.date] = Field(None, description="Purchase date, defaults to today")


class PurchaseResponse(BaseModel):
    """Stored purchase with its installment plan"""

    id: str
    name: str
    amount: Decimal
    date: datetime.date
    installments: int
    monthly_payment: Decimal


class PaymentRequest(BaseModel):
    """Request body for POST /v1/payments"""

    month: str = Field(..., min_length=7, description="YYYY-MM or YYYY-MM-DD (day ignored)")
    amount: Decimal = Field(..., ge=0, description="Cash paid, added to the month's total")


class PaymentReplaceRequest(BaseModel):
    """Request body for PUT /v1/payments/{month}"""

    amount: Decimal = Field(..., description="New month total, negative values clamp to 0")


class ScheduleRowSchema(BaseModel):
    """Single (purchase, month) row in the timeline"""

    purchase_id: str
    purchase_date: datetime.date
    month: str
    month_label: str
    is_first_row: bool
    amount_paid: Decimal
    projected: Decimal
    name: Optional[str] = None
    amount: Optional[Decimal] = None
    installments: Optional[int] = None
    amount_left: Optional[Decimal] = None
    months_elapsed: Optional[int] = None
    months_remaining: Optional[int] = None


class SummaryResponse(BaseModel):
    """Response for GET /v1/summary"""

    credit_limit: Decimal
    total_remaining_debt: Decimal
    available_credit: Decimal
    currency: str


class ScheduleResponse(BaseModel):
    """Response for GET /v1/schedule"""

    rows: List[ScheduleRowSchema]
    allocations: Dict[str, Dict[str, Decimal]]
    total_paid: Dict[str, Decimal]
    summary: SummaryResponse
