"""Due-amount quotes and payment application"""

import time
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple
from sqlalchemy.orm import Session

from loan_engine.config import settings
from loan_engine.domain.exceptions import AmountMismatchError, NoRowsAffectedError
from loan_engine.domain.ledger import (
    outstanding_after_payment,
    select_due,
    total_due,
    validate_installment_ids,
    validate_payment_amount,
)
from loan_engine.domain.models import DueQuote, PaymentReceipt
from loan_engine.infrastructure.database.models import Installment, Loan
from loan_engine.infrastructure.database.repositories import LoanRepository
from loan_engine.infrastructure.database.unit_of_work import UnitOfWork
from loan_engine.infrastructure.observability.logging import log_payment_applied
from loan_engine.infrastructure.observability.metrics import record_payment, workflow_duration_histogram
from loan_engine.services.assemblers import to_installment_view
from loan_engine.utils.date_utils import utc_now, utc_today
from loan_engine.utils.deadline import Deadline


class PaymentService:
    """Quotes what a loan currently owes and settles it in one payment"""

    def __init__(
        self,
        db: Session,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], date] = utc_today,
        strict_installment_match: Optional[bool] = None,
    ):
        self.db = db
        self.timeout_seconds = (
            settings.workflow_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self.clock = clock
        self.strict_installment_match = (
            settings.strict_installment_match if strict_installment_match is None else strict_installment_match
        )
        self.loans = LoanRepository(db)

    def _due_set(self, loan_id: int) -> Tuple[Loan, List[Installment]]:
        """Resolve the loan and its unpaid installments due as of today (UTC)"""
        loan = self.loans.find_by_id(loan_id)
        due = select_due(loan.installments, self.clock())
        return loan, due

    def quote_due(self, loan_id: int) -> DueQuote:
        """
        Total currently owed on a loan.

        Installments due in the future are left out. Read-only.

        Raises:
            NotFoundError: Loan does not exist
        """
        deadline = Deadline(self.timeout_seconds)
        _, due = self._due_set(loan_id)
        deadline.check("quote_due")

        return DueQuote(
            loan_id=loan_id,
            total_due_cents=total_due(due),
            installments=[to_installment_view(inst) for inst in due],
        )

    def apply_payment(self, loan_id: int, installment_ids: Sequence[int], amount_cents: int) -> PaymentReceipt:
        """
        Settle everything currently due on a loan.

        Flow:
        1. Recompute the due set and its total
        2. Reject any amount other than exactly the total (nothing is written)
        3. In one transaction: record the payment, mark the given installments
           paid, decrement the loan's outstanding amount

        Raises:
            NotFoundError: Loan does not exist
            ValidationError: Non-positive amount, or ids differ from the due
                set when strict_installment_match is on
            AmountMismatchError: Amount differs from the total due
            NoRowsAffectedError: None of the ids named an unpaid installment
                of this loan; the payment is rolled back
            LedgerInvariantError: Payment would take the outstanding amount
                below zero; the payment is rolled back
            WorkflowTimeoutError: Deadline passed before commit
        """
        start_time = time.time()
        deadline = Deadline(self.timeout_seconds)

        try:
            receipt = self._apply(loan_id, installment_ids, amount_cents, deadline)
        except AmountMismatchError:
            record_payment("amount_mismatch")
            raise
        except NoRowsAffectedError:
            record_payment("no_rows_affected")
            raise
        except Exception:
            record_payment("error")
            raise

        duration = time.time() - start_time
        workflow_duration_histogram.labels(workflow="apply_payment").observe(duration)
        record_payment("applied")
        log_payment_applied(
            loan_id,
            receipt.payment_id,
            amount_cents,
            receipt.installments_paid,
            receipt.outstanding_cents,
            duration * 1000,
        )
        return receipt

    def _apply(
        self, loan_id: int, installment_ids: Sequence[int], amount_cents: int, deadline: Deadline
    ) -> PaymentReceipt:
        _, due = self._due_set(loan_id)
        validate_payment_amount(amount_cents, total_due(due))
        if self.strict_installment_match:
            validate_installment_ids(installment_ids, due)
        deadline.check("validate_payment")

        with UnitOfWork(self.db, deadline, name="apply_payment") as uow:
            # Serializes concurrent payments on this loan where row locks exist
            loan = uow.loans.find_by_id_for_update(loan_id)

            paid_at = utc_now()
            payment = uow.payments.create(loan_id, amount_cents, paid_at)
            uow.checkpoint("create_payment")

            rows = uow.installments.mark_paid(loan_id, installment_ids)
            if rows == 0:
                raise NoRowsAffectedError(
                    f"no unpaid installments of loan {loan_id} matched ids {list(installment_ids)}"
                )
            uow.checkpoint("mark_paid")

            loan.outstanding_cents = outstanding_after_payment(loan.outstanding_cents, amount_cents)
            uow.loans.update(loan)

            receipt = PaymentReceipt(
                payment_id=payment.id,
                loan_id=loan_id,
                amount_cents=amount_cents,
                installment_ids=sorted(set(installment_ids)),
                installments_paid=rows,
                outstanding_cents=loan.outstanding_cents,
                paid_at=paid_at,
            )

        return receipt
