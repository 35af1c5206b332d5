"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from loan_engine.infrastructure.database.session import get_db
from loan_engine.services.borrowers import BorrowerService
from loan_engine.services.loans import LoanService
from loan_engine.services.payments import PaymentService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_borrower_service(db: Session = Depends(get_db)) -> BorrowerService:
    return BorrowerService(db)


def get_loan_service(db: Session = Depends(get_db)) -> LoanService:
    return LoanService(db)


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    return PaymentService(db)
