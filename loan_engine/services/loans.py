"""Loan origination and loan lookups"""

import time
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session

from loan_engine.config import settings
from loan_engine.domain.ledger import validate_loan_terms
from loan_engine.domain.models import LoanDetailsView, LoanView
from loan_engine.domain.schedule import generate_schedule, schedule_total
from loan_engine.infrastructure.database.models import Loan
from loan_engine.infrastructure.database.repositories import BorrowerRepository, LoanRepository
from loan_engine.infrastructure.database.unit_of_work import UnitOfWork
from loan_engine.infrastructure.observability.logging import log_loan_created
from loan_engine.infrastructure.observability.metrics import record_loan_created, workflow_duration_histogram
from loan_engine.services.assemblers import to_borrower_view, to_loan_view
from loan_engine.utils.deadline import Deadline


class LoanService:
    """Creates loans with their schedules and answers loan lookups"""

    def __init__(self, db: Session, timeout_seconds: Optional[float] = None):
        self.db = db
        self.timeout_seconds = (
            settings.workflow_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self.borrowers = BorrowerRepository(db)
        self.loans = LoanRepository(db)

    def create_loan(
        self,
        borrower_id: int,
        principal_cents: int,
        annual_interest_rate: float,
        term_weeks: int,
        start_date: date,
    ) -> LoanView:
        """
        Originate a loan and its full weekly schedule.

        Flow:
        1. Validate terms and resolve the borrower (read-only, no transaction needed)
        2. Insert the loan to obtain its ID
        3. Generate the schedule and set outstanding = schedule total
        4. Insert all installments
        5. Commit; a failure anywhere in 2-4 leaves neither loan nor installments

        Raises:
            ValidationError: Non-positive principal or term, negative rate
            NotFoundError: Borrower does not exist
            WorkflowTimeoutError: Deadline passed before commit
        """
        start_time = time.time()
        deadline = Deadline(self.timeout_seconds)

        validate_loan_terms(principal_cents, annual_interest_rate, term_weeks)
        self.borrowers.find_by_id(borrower_id)
        deadline.check("resolve_borrower")

        with UnitOfWork(self.db, deadline, name="create_loan") as uow:
            loan = Loan(
                borrower_id=borrower_id,
                principal_cents=principal_cents,
                annual_interest_rate=annual_interest_rate,
                term_weeks=term_weeks,
                start_date=start_date,
            )
            uow.loans.create(loan)
            uow.checkpoint("create_loan")

            schedule = generate_schedule(principal_cents, annual_interest_rate, term_weeks, start_date)
            loan.outstanding_cents = schedule_total(schedule)
            uow.loans.update(loan)

            installments = uow.installments.bulk_create(loan.id, schedule)
            uow.checkpoint("bulk_create_installments")

            view = to_loan_view(loan, installments)

        duration = time.time() - start_time
        workflow_duration_histogram.labels(workflow="create_loan").observe(duration)
        record_loan_created(principal_cents)
        log_loan_created(
            view.id, borrower_id, principal_cents, view.outstanding_cents, term_weeks, duration * 1000
        )
        return view

    def get_loan_details(self, loan_id: int) -> LoanDetailsView:
        """Loan, its borrower and full schedule including paid installments"""
        deadline = Deadline(self.timeout_seconds)
        loan = self.loans.find_by_id(loan_id)
        borrower = self.borrowers.find_by_id(loan.borrower_id)
        deadline.check("get_loan_details")
        return LoanDetailsView(loan=to_loan_view(loan), borrower=to_borrower_view(borrower))

    def get_outstanding_amount(self, loan_id: int) -> int:
        deadline = Deadline(self.timeout_seconds)
        loan = self.loans.find_by_id(loan_id)
        deadline.check("get_outstanding_amount")
        return loan.outstanding_cents
