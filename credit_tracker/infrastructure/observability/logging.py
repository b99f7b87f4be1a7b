"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "credit-tracker"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_purchase_created(
    request_id: str,
    purchase_id: str,
    installments: int,
    monthly_payment: Decimal,
) -> None:
    logging.info(
        "Purchase created",
        extra={
            "request_id": request_id,
            "purchase_id": purchase_id,
            "step": "purchase_created",
            "installments": installments,
            "monthly_payment": str(monthly_payment),
        },
    )


def log_ledger_update(request_id: str, month: str, operation: str, amount: Decimal) -> None:
    logging.info(
        "Ledger month updated",
        extra={
            "request_id": request_id,
            "step": "ledger_update",
            "month": month,
            "operation": operation,
            "amount": str(amount),
        },
    )


def log_schedule_computed(
    request_id: str,
    row_count: int,
    total_remaining_debt: Decimal,
    duration_ms: float,
) -> None:
    """Log schedule computation outcome for analysis"""
    logging.info(
        "Schedule computed",
        extra={
            "request_id": request_id,
            "step": "schedule_complete",
            "row_count": row_count,
            "total_remaining_debt": str(total_remaining_debt),
            "duration_ms": duration_ms,
        },
    )
