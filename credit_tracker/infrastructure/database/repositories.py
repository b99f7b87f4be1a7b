"""Data access layer for purchases and the monthly ledger"""

import logging
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from credit_tracker.domain.exceptions import CorruptRecordError, StorageError
from credit_tracker.domain.models import Ledger, Purchase
from credit_tracker.infrastructure.database.models import LedgerMonthRecord, PurchaseRecord
from credit_tracker.infrastructure.database.session import write_lock
from credit_tracker.infrastructure.observability.metrics import storage_failure_counter
from credit_tracker.utils.date_utils import Month


def to_purchase(record: PurchaseRecord) -> Purchase:
    """
    Parse a stored row into a Purchase.

    Raises:
        CorruptRecordError: On missing or out-of-range fields
    """
    if not record.id or not (record.name or "").strip():
        raise CorruptRecordError(f"Purchase {record.id!r} has no id or name")
    if record.purchase_date is None:
        raise CorruptRecordError(f"Purchase {record.id} has no date")
    try:
        amount = Decimal(record.amount)
        monthly_payment = Decimal(record.monthly_payment)
        installments = int(record.installments)
    except (TypeError, ValueError, ArithmeticError) as e:
        raise CorruptRecordError(f"Purchase {record.id} has invalid figures: {e}") from e
    if amount <= 0 or installments < 0 or monthly_payment < 0:
        raise CorruptRecordError(f"Purchase {record.id} has out-of-range figures")

    return Purchase(
        id=record.id,
        name=record.name,
        amount=amount,
        date=record.purchase_date,
        installments=installments,
        monthly_payment=monthly_payment,
    )


def to_ledger_entry(record: LedgerMonthRecord) -> Tuple[Month, Decimal]:
    """
    Parse a stored ledger row.

    Raises:
        CorruptRecordError: On an unparseable month key or negative amount
    """
    try:
        month = Month.parse(record.month)
        amount = Decimal(record.amount)
    except (TypeError, ValueError, ArithmeticError) as e:
        raise CorruptRecordError(f"Ledger row {record.month!r} is invalid: {e}") from e
    if amount < 0:
        raise CorruptRecordError(f"Ledger row {record.month} has negative amount")
    return month, amount


class PurchaseRepository:
    """Repository for purchases"""

    def __init__(self, db: Session):
        self.db = db

    def list_purchases(self) -> List[Purchase]:
        """
        Fetch all purchases in insertion order.

        A missing table or a row that fails validation yields an empty list.
        """
        try:
            records = (
                self.db.query(PurchaseRecord)
                .order_by(PurchaseRecord.created_at, PurchaseRecord.purchase_date, PurchaseRecord.id)
                .all()
            )
            return [to_purchase(r) for r in records]
        except (SQLAlchemyError, CorruptRecordError) as e:
            self.db.rollback()
            storage_failure_counter.labels(operation="read_purchases").inc()
            logging.warning(f"Purchase list unreadable, treating as empty: {e}")
            return []

    def add_purchase(self, purchase: Purchase) -> Purchase:
        """
        Persist a new purchase.

        Raises:
            StorageError: If the row cannot be written
        """
        try:
            self.db.add(
                PurchaseRecord(
                    id=purchase.id,
                    name=purchase.name,
                    amount=purchase.amount,
                    purchase_date=purchase.date,
                    installments=purchase.installments,
                    monthly_payment=purchase.monthly_payment,
                )
            )
            self.db.flush()
        except SQLAlchemyError as e:
            storage_failure_counter.labels(operation="write_purchase").inc()
            raise StorageError(f"Could not persist purchase: {e}") from e
        return purchase


class LedgerRepository:
    """Repository for monthly ledger totals"""

    def __init__(self, db: Session):
        self.db = db

    def get_ledger(self) -> Ledger:
        """
        Fetch the month -> amount mapping.

        A missing table or a row that fails validation yields an empty ledger.
        """
        try:
            records = self.db.query(LedgerMonthRecord).all()
            return dict(to_ledger_entry(r) for r in records)
        except (SQLAlchemyError, CorruptRecordError) as e:
            self.db.rollback()
            storage_failure_counter.labels(operation="read_ledger").inc()
            logging.warning(f"Ledger unreadable, treating as empty: {e}")
            return {}

    def get_month(self, month: Month) -> Ledger:
        """
        Strict read of a single month for read-modify-write.

        Always reloads the row from the database so a long-lived session
        never increments from a stale total. Returns an empty ledger if the
        month has no row yet.

        Raises:
            CorruptRecordError: If the stored row fails validation
        """
        record = self.db.get(LedgerMonthRecord, str(month), populate_existing=True)
        if record is None:
            return {}
        key, amount = to_ledger_entry(record)
        return {key: amount}

    def set_month(self, month: Month, amount: Decimal) -> None:
        """
        Upsert one month's total.

        Raises:
            StorageError: If the row cannot be written
        """
        try:
            record = self.db.get(LedgerMonthRecord, str(month))
            if record is None:
                self.db.add(LedgerMonthRecord(month=str(month), amount=amount))
            else:
                record.amount = amount
            self.db.flush()
        except SQLAlchemyError as e:
            storage_failure_counter.labels(operation="write_ledger").inc()
            raise StorageError(f"Could not persist ledger month {month}: {e}") from e


def load_snapshot(db: Session) -> Tuple[List[Purchase], Ledger]:
    """Read purchases and ledger together, excluding concurrent writers"""
    with write_lock:
        purchases = PurchaseRepository(db).list_purchases()
        ledger = LedgerRepository(db).get_ledger()
    return purchases, ledger
