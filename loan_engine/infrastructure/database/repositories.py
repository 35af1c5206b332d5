"""Data access layer for loan engine entities"""

from datetime import datetime
from typing import List, Sequence
from sqlalchemy.orm import Session, selectinload
from loan_engine.domain.exceptions import NotFoundError
from loan_engine.domain.models import ScheduledInstallment
from loan_engine.infrastructure.database.models import Borrower, Installment, Loan, Payment


class BorrowerRepository:
    """Repository for borrowers"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, first_name: str, last_name: str, email: str) -> Borrower:
        db_borrower = Borrower(first_name=first_name, last_name=last_name, email=email)
        self.db.add(db_borrower)
        self.db.flush()  # Get ID without committing
        return db_borrower

    def find_by_id(self, borrower_id: int) -> Borrower:
        """Fetch borrower or raise NotFoundError"""
        borrower = self.db.get(Borrower, borrower_id)
        if borrower is None:
            raise NotFoundError(f"Borrower {borrower_id} not found")
        return borrower


class LoanRepository:
    """Repository for loans"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, loan: Loan) -> Loan:
        """Persist loan and assign its ID"""
        self.db.add(loan)
        self.db.flush()
        return loan

    def update(self, loan: Loan) -> Loan:
        self.db.add(loan)
        self.db.flush()
        return loan

    def find_by_id(self, loan_id: int) -> Loan:
        """Fetch loan with its installments or raise NotFoundError"""
        loan = (
            self.db.query(Loan)
            .options(selectinload(Loan.installments))
            .filter(Loan.id == loan_id)
            .first()
        )
        if loan is None:
            raise NotFoundError(f"Loan {loan_id} not found")
        return loan

    def find_by_id_for_update(self, loan_id: int) -> Loan:
        """Fetch loan with a row lock held until the transaction ends"""
        loan = (
            self.db.query(Loan)
            .filter(Loan.id == loan_id)
            .populate_existing()
            .with_for_update()
            .first()
        )
        if loan is None:
            raise NotFoundError(f"Loan {loan_id} not found")
        return loan

    def find_all_by_borrower_id(self, borrower_id: int) -> List[Loan]:
        """All loans of a borrower with installments; NotFoundError if there are none"""
        loans = (
            self.db.query(Loan)
            .options(selectinload(Loan.installments))
            .filter(Loan.borrower_id == borrower_id)
            .order_by(Loan.id)
            .all()
        )
        if not loans:
            raise NotFoundError(f"No loans found for borrower {borrower_id}")
        return loans


class InstallmentRepository:
    """Repository for installment schedules"""

    def __init__(self, db: Session):
        self.db = db

    def bulk_create(self, loan_id: int, installments: Sequence[ScheduledInstallment]) -> List[Installment]:
        """Persist a loan's whole schedule"""
        db_installments = [
            Installment(
                loan_id=loan_id,
                due_date=inst.due_date,
                due_amount_cents=inst.due_amount_cents,
                paid=False,
            )
            for inst in installments
        ]
        self.db.add_all(db_installments)
        self.db.flush()
        return db_installments

    def mark_paid(self, loan_id: int, installment_ids: Sequence[int]) -> int:
        """
        Flip unpaid installments of this loan to paid.

        Returns:
            Number of rows updated; ids that are already paid or belong to
            another loan are not counted
        """
        if not installment_ids:
            return 0
        return (
            self.db.query(Installment)
            .filter(
                Installment.loan_id == loan_id,
                Installment.id.in_(list(installment_ids)),
                Installment.paid.is_(False),
            )
            .update({Installment.paid: True}, synchronize_session="fetch")
        )


class PaymentRepository:
    """Repository for payments"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, loan_id: int, amount_cents: int, paid_at: datetime) -> Payment:
        db_payment = Payment(loan_id=loan_id, amount_cents=amount_cents, paid_at=paid_at)
        self.db.add(db_payment)
        self.db.flush()
        return db_payment
