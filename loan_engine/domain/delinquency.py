"""Delinquency rule used to gate future lending decisions"""

from datetime import date
from typing import Iterable
from loan_engine.domain.ledger import InstallmentLike

DEFAULT_DELINQUENCY_THRESHOLD = 2


def count_overdue(installments: Iterable[InstallmentLike], as_of: date) -> int:
    """
    Unpaid installments that have fallen due by as_of.

    A due date marks the start of that day, so an installment due on as_of
    is already overdue.
    """
    return sum(1 for inst in installments if not inst.paid and inst.due_date <= as_of)


def is_delinquent(
    installments: Iterable[InstallmentLike],
    as_of: date,
    threshold: int = DEFAULT_DELINQUENCY_THRESHOLD,
) -> bool:
    """
    A borrower is delinquent once `threshold` installments are overdue.

    The count runs over the installments of all the borrower's loans
    combined, not loan by loan.
    """
    return count_overdue(installments, as_of) >= threshold
