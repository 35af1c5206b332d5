"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass
class ScheduledInstallment:
    """Single weekly due amount produced by the schedule generator"""

    due_date: date
    due_amount_cents: int


@dataclass
class InstallmentView:
    """Persisted installment as returned to callers"""

    id: Optional[int]
    due_date: date
    due_amount_cents: int
    paid: bool = False


@dataclass
class BorrowerView:
    """Borrower identity and contact attributes"""

    id: int
    first_name: str
    last_name: str
    email: str
    created_at: Optional[datetime] = None


@dataclass
class LoanView:
    """Loan fields plus its installment schedule"""

    id: int
    borrower_id: int
    principal_cents: int
    annual_interest_rate: float
    term_weeks: int
    start_date: date
    outstanding_cents: int
    installments: List[InstallmentView] = field(default_factory=list)
    created_at: Optional[datetime] = None


@dataclass
class LoanDetailsView:
    """Loan with its borrower, as shown by the loan details lookup"""

    loan: LoanView
    borrower: BorrowerView


@dataclass
class DueQuote:
    """Unpaid installments due as of today and their total"""

    loan_id: int
    total_due_cents: int
    installments: List[InstallmentView]


@dataclass
class PaymentReceipt:
    """Outcome of a successful payment"""

    payment_id: int
    loan_id: int
    amount_cents: int
    installment_ids: List[int]
    installments_paid: int
    outstanding_cents: int
    paid_at: datetime
