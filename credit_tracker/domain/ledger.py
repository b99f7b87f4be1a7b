"""Monthly cash ledger mutations"""

from decimal import Decimal, InvalidOperation
from typing import Union

from credit_tracker.domain.exceptions import InvalidLedgerEntryError
from credit_tracker.domain.models import Ledger
from credit_tracker.domain.planner import round2
from credit_tracker.utils.date_utils import Month


def parse_month(value: Union[str, Month]) -> Month:
    """Accept "YYYY-MM" or "YYYY-MM-DD" (day discarded)"""
    if isinstance(value, Month):
        return value
    try:
        return Month.parse(value)
    except ValueError as e:
        raise InvalidLedgerEntryError("month (YYYY-MM) required") from e


def _to_amount(amount) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidLedgerEntryError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise InvalidLedgerEntryError(f"Invalid amount: {amount!r}")
    return value


def increment_month(ledger: Ledger, month: Union[str, Month], amount) -> Ledger:
    """
    Add cash to a month's running total.

    Returns a new ledger; the input is not modified.

    Raises:
        InvalidLedgerEntryError: Malformed month or negative amount
    """
    key = parse_month(month)
    value = _to_amount(amount)
    if value < 0:
        raise InvalidLedgerEntryError("amount must be non-negative")

    updated = dict(ledger)
    updated[key] = round2(updated.get(key, Decimal("0")) + value)
    return updated


def replace_month(ledger: Ledger, month: Union[str, Month], amount) -> Ledger:
    """Overwrite a month's total; negative amounts are clamped to zero"""
    key = parse_month(month)
    value = _to_amount(amount)

    updated = dict(ledger)
    updated[key] = round2(max(Decimal("0"), value))
    return updated
