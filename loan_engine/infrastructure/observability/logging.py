"""Structured JSON logging for production observability"""

import logging
import sys
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from loan_engine.config import settings
from loan_engine.utils.date_utils import utc_now


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = utc_now().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


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


def log_loan_created(
    loan_id: int,
    borrower_id: int,
    principal_cents: int,
    outstanding_cents: int,
    term_weeks: int,
    duration_ms: float,
) -> None:
    """Log structured loan origination for analysis"""
    logging.info(
        "Loan created",
        extra={
            "step": "loan_created",
            "loan_id": loan_id,
            "borrower_id": borrower_id,
            "principal_cents": principal_cents,
            "outstanding_cents": outstanding_cents,
            "term_weeks": term_weeks,
            "duration_ms": duration_ms,
        },
    )


def log_payment_applied(
    loan_id: int,
    payment_id: int,
    amount_cents: int,
    installments_paid: int,
    outstanding_cents: int,
    duration_ms: float,
) -> None:
    logging.info(
        "Payment applied",
        extra={
            "step": "payment_applied",
            "loan_id": loan_id,
            "payment_id": payment_id,
            "amount_cents": amount_cents,
            "installments_paid": installments_paid,
            "outstanding_cents": outstanding_cents,
            "duration_ms": duration_ms,
        },
    )


def log_delinquency_check(borrower_id: int, overdue_count: int, delinquent: bool) -> None:
    logging.info(
        "Delinquency evaluated",
        extra={
            "step": "delinquency_check",
            "borrower_id": borrower_id,
            "overdue_count": overdue_count,
            "delinquent": delinquent,
        },
    )
