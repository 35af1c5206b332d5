"""Map ORM rows to the domain views returned by the services"""

from typing import Iterable, Optional
from loan_engine.domain.models import BorrowerView, InstallmentView, LoanView
from loan_engine.infrastructure.database.models import Borrower, Installment, Loan


def to_installment_view(installment: Installment) -> InstallmentView:
    return InstallmentView(
        id=installment.id,
        due_date=installment.due_date,
        due_amount_cents=installment.due_amount_cents,
        paid=bool(installment.paid),
    )


def to_borrower_view(borrower: Borrower) -> BorrowerView:
    return BorrowerView(
        id=borrower.id,
        first_name=borrower.first_name,
        last_name=borrower.last_name,
        email=borrower.email,
        created_at=borrower.created_at,
    )


def to_loan_view(loan: Loan, installments: Optional[Iterable[Installment]] = None) -> LoanView:
    """Loan fields plus schedule; defaults to the loan's loaded installments"""
    if installments is None:
        installments = loan.installments
    return LoanView(
        id=loan.id,
        borrower_id=loan.borrower_id,
        principal_cents=loan.principal_cents,
        annual_interest_rate=loan.annual_interest_rate,
        term_weeks=loan.term_weeks,
        start_date=loan.start_date,
        outstanding_cents=loan.outstanding_cents,
        installments=[to_installment_view(inst) for inst in installments],
        created_at=loan.created_at,
    )
