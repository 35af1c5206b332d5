"""Loan ledger rules: loan terms, due-set selection and balance bookkeeping"""

from datetime import date
from typing import Iterable, List, Protocol, Sequence
from loan_engine.domain.exceptions import (
    AmountMismatchError,
    InstallmentMismatchError,
    LedgerInvariantError,
    ValidationError,
)


class InstallmentLike(Protocol):
    id: int
    due_date: date
    due_amount_cents: int
    paid: bool


def validate_loan_terms(principal_cents: int, annual_interest_rate: float, term_weeks: int) -> None:
    """Reject loan terms the schedule generator cannot amortize"""
    if principal_cents <= 0:
        raise ValidationError("principal must be positive")
    if annual_interest_rate < 0:
        raise ValidationError("interest rate must not be negative")
    if term_weeks <= 0:
        raise ValidationError("term must be at least one week")


def select_due(installments: Iterable[InstallmentLike], as_of: date) -> List[InstallmentLike]:
    """Unpaid installments due on or before as_of, oldest first"""
    return sorted(
        (inst for inst in installments if not inst.paid and inst.due_date <= as_of),
        key=lambda inst: inst.due_date,
    )


def total_due(installments: Iterable[InstallmentLike]) -> int:
    return sum(inst.due_amount_cents for inst in installments)


def validate_payment_amount(amount_cents: int, total_due_cents: int) -> None:
    """
    A payment must settle exactly what is due.

    No partial payments and no overpayment credit; the comparison is on whole
    cents so there is no floating-point tolerance to reason about.
    """
    if amount_cents <= 0:
        raise ValidationError("payment amount must be positive")
    if amount_cents != total_due_cents:
        raise AmountMismatchError(amount_cents, total_due_cents)


def validate_installment_ids(installment_ids: Sequence[int], due: Iterable[InstallmentLike]) -> None:
    """Require the paid ids to be exactly the ids of the current due set"""
    expected = {inst.id for inst in due}
    supplied = set(installment_ids)
    if supplied != expected:
        raise InstallmentMismatchError(
            f"installment ids {sorted(supplied)} do not match due installments {sorted(expected)}"
        )


def outstanding_after_payment(outstanding_cents: int, amount_cents: int) -> int:
    """
    Decrement the outstanding balance; it may reach zero but never go below.

    Called inside the payment unit of work, so the error it raises rolls the
    whole payment back.
    """
    remaining = outstanding_cents - amount_cents
    if remaining < 0:
        raise LedgerInvariantError(
            f"payment of {amount_cents} exceeds outstanding amount {outstanding_cents}"
        )
    return remaining
