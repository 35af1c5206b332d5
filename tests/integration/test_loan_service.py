"""Tests for loan origination and lookups"""

import pytest
from datetime import date
from unittest.mock import patch
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loan_engine.domain.exceptions import NotFoundError, ValidationError, WorkflowTimeoutError
from loan_engine.infrastructure.database.models import Installment, Loan
from loan_engine.infrastructure.database.repositories import InstallmentRepository, LoanRepository
from loan_engine.services.loans import LoanService


def test_create_loan_reference_example(loan_service: LoanService, borrower, db: Session):
    loan = loan_service.create_loan(borrower.id, 100000, 5.0, 2, date(2023, 1, 1))

    assert loan.outstanding_cents == 100192
    assert loan.borrower_id == borrower.id
    assert [(i.due_date, i.due_amount_cents, i.paid) for i in loan.installments] == [
        (date(2023, 1, 8), 50096, False),
        (date(2023, 1, 15), 50096, False),
    ]

    stored = db.get(Loan, loan.id)
    assert stored.outstanding_cents == 100192
    assert len(stored.installments) == 2


def test_outstanding_equals_sum_of_installments(make_loan):
    loan = make_loan(date(2024, 1, 1), term_weeks=13, principal_cents=123457, annual_interest_rate=7.3)

    assert len(loan.installments) == 13
    assert loan.outstanding_cents == sum(i.due_amount_cents for i in loan.installments)


def test_create_loan_unknown_borrower_persists_nothing(loan_service: LoanService, db: Session):
    with pytest.raises(NotFoundError):
        loan_service.create_loan(999, 100000, 5.0, 4, date(2024, 1, 1))

    assert db.query(Loan).count() == 0
    assert db.query(Installment).count() == 0


@pytest.mark.parametrize(
    "principal_cents, rate, term_weeks",
    [(0, 5.0, 4), (100000, -1.0, 4), (100000, 5.0, 0)],
)
def test_create_loan_rejects_invalid_terms(loan_service: LoanService, borrower, db: Session, principal_cents, rate, term_weeks):
    with pytest.raises(ValidationError):
        loan_service.create_loan(borrower.id, principal_cents, rate, term_weeks, date(2024, 1, 1))

    assert db.query(Loan).count() == 0


def test_installment_failure_rolls_back_loan(loan_service: LoanService, borrower, db: Session):
    """A failure between loan insert and installment insert leaves no rows at all"""
    with patch.object(InstallmentRepository, "bulk_create", side_effect=SQLAlchemyError("disk full")):
        with pytest.raises(SQLAlchemyError, match="disk full"):
            loan_service.create_loan(borrower.id, 100000, 5.0, 4, date(2024, 1, 1))

    assert db.query(Loan).count() == 0
    assert db.query(Installment).count() == 0


def test_unexpected_error_during_update_rolls_back(loan_service: LoanService, borrower, db: Session):
    with patch.object(LoanRepository, "update", side_effect=RuntimeError("unexpected")):
        with pytest.raises(RuntimeError):
            loan_service.create_loan(borrower.id, 100000, 5.0, 4, date(2024, 1, 1))

    assert db.query(Loan).count() == 0
    assert db.query(Installment).count() == 0


def test_create_loan_times_out(db: Session, borrower):
    service = LoanService(db, timeout_seconds=1e-9)

    with pytest.raises(WorkflowTimeoutError):
        service.create_loan(borrower.id, 100000, 5.0, 4, date(2024, 1, 1))

    assert db.query(Loan).count() == 0


def test_zero_timeout_is_not_replaced_by_default(db: Session, borrower):
    service = LoanService(db, timeout_seconds=0)

    assert service.timeout_seconds == 0
    with pytest.raises(WorkflowTimeoutError):
        service.create_loan(borrower.id, 100000, 5.0, 4, date(2024, 1, 1))

    assert db.query(Loan).count() == 0


def test_get_loan_details(loan_service: LoanService, make_loan, borrower):
    created = make_loan(date(2024, 1, 1), term_weeks=3)

    details = loan_service.get_loan_details(created.id)

    assert details.loan.id == created.id
    assert details.loan.outstanding_cents == created.outstanding_cents
    assert [i.due_date for i in details.loan.installments] == [
        date(2024, 1, 8),
        date(2024, 1, 15),
        date(2024, 1, 22),
    ]
    assert details.borrower.id == borrower.id
    assert details.borrower.email == "ada@example.com"


def test_get_loan_details_not_found(loan_service: LoanService):
    with pytest.raises(NotFoundError):
        loan_service.get_loan_details(42)


def test_get_outstanding_amount(loan_service: LoanService, make_loan):
    created = make_loan(date(2023, 1, 1), term_weeks=2)

    assert loan_service.get_outstanding_amount(created.id) == 100192
    with pytest.raises(NotFoundError):
        loan_service.get_outstanding_amount(created.id + 1)
