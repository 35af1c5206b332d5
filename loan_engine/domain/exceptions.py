"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Borrower or loan does not exist, or borrower has no loans"""

    pass


class ValidationError(DomainException):
    """Input rejected before any unit of work begins"""

    pass


class InstallmentMismatchError(ValidationError):
    """Installment ids supplied with a payment differ from the current due set"""

    pass


class AmountMismatchError(DomainException):
    """Payment amount does not equal the total currently due"""

    def __init__(self, amount_cents: int, total_due_cents: int):
        super().__init__(
            f"payment amount {amount_cents} does not match the total due amount {total_due_cents}"
        )
        self.amount_cents = amount_cents
        self.total_due_cents = total_due_cents


class NoRowsAffectedError(DomainException):
    """Installment update touched no rows"""

    pass


class TransactionError(DomainException):
    """Storage layer failed to begin, commit or roll back a transaction"""

    pass


class LedgerInvariantError(DomainException):
    """Write inside a unit of work would break a ledger invariant; the unit rolls back"""

    pass


class WorkflowTimeoutError(DomainException):
    """Workflow ran past its deadline and was cancelled"""

    pass
