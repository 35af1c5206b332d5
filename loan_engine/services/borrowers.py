"""Borrower registration and delinquency status"""

from datetime import date
from typing import Callable, Optional
from sqlalchemy.orm import Session

from loan_engine.config import settings
from loan_engine.domain import delinquency
from loan_engine.domain.models import BorrowerView
from loan_engine.infrastructure.database.repositories import BorrowerRepository, LoanRepository
from loan_engine.infrastructure.database.unit_of_work import UnitOfWork
from loan_engine.infrastructure.observability.logging import log_delinquency_check
from loan_engine.infrastructure.observability.metrics import record_delinquency_check
from loan_engine.services.assemblers import to_borrower_view
from loan_engine.utils.date_utils import utc_today
from loan_engine.utils.deadline import Deadline


class BorrowerService:
    """Registers borrowers and evaluates whether they are delinquent"""

    def __init__(
        self,
        db: Session,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], date] = utc_today,
        delinquency_threshold: Optional[int] = None,
    ):
        self.db = db
        self.timeout_seconds = (
            settings.workflow_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self.clock = clock
        self.delinquency_threshold = (
            settings.delinquency_threshold if delinquency_threshold is None else delinquency_threshold
        )
        self.borrowers = BorrowerRepository(db)
        self.loans = LoanRepository(db)

    def create_borrower(self, first_name: str, last_name: str, email: str) -> BorrowerView:
        deadline = Deadline(self.timeout_seconds)
        with UnitOfWork(self.db, deadline, name="create_borrower") as uow:
            borrower = uow.borrowers.create(first_name, last_name, email)
            view = to_borrower_view(borrower)
        return view

    def is_delinquent(self, borrower_id: int) -> bool:
        """
        Whether the borrower has too many overdue unpaid installments.

        Overdue installments are counted across all of the borrower's loans.

        Raises:
            NotFoundError: Borrower does not exist, or has no loans at all
        """
        deadline = Deadline(self.timeout_seconds)
        self.borrowers.find_by_id(borrower_id)
        loans = self.loans.find_all_by_borrower_id(borrower_id)
        deadline.check("load_loans")

        installments = [inst for loan in loans for inst in loan.installments]
        as_of = self.clock()
        overdue = delinquency.count_overdue(installments, as_of)
        delinquent = delinquency.is_delinquent(installments, as_of, self.delinquency_threshold)

        record_delinquency_check(delinquent)
        log_delinquency_check(borrower_id, overdue, delinquent)
        return delinquent
