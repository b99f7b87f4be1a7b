"""SQLAlchemy ORM models for purchases and the monthly ledger"""

from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PurchaseRecord(Base):
    """Credit card purchase with its installment plan snapshot"""

    __tablename__ = "purchase"

    id = Column(String(36), primary_key=True)
    name = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    purchase_date = Column(Date, nullable=False, index=True)
    installments = Column(Integer, nullable=False)
    monthly_payment = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)  # Insertion order


class LedgerMonthRecord(Base):
    """Total cash paid in one calendar month"""

    __tablename__ = "ledger_month"

    month = Column(String(7), primary_key=True)  # YYYY-MM
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
