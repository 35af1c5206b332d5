"""Scoped all-or-nothing unit of work over a SQLAlchemy session"""

import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loan_engine.domain.exceptions import TransactionError
from loan_engine.infrastructure.database.repositories import (
    BorrowerRepository,
    InstallmentRepository,
    LoanRepository,
    PaymentRepository,
)
from loan_engine.infrastructure.observability.metrics import rollback_counter
from loan_engine.utils.deadline import Deadline


class UnitOfWork:
    """
    Transaction scope for one write workflow.

    Usage:
        with UnitOfWork(db, deadline, name="create_loan") as uow:
            uow.loans.create(loan)
            uow.installments.bulk_create(rows)
        # committed here; any exception inside the block rolled back instead

    Every repository reached through the unit shares its session, so all of
    their writes commit or roll back together. Commit only happens on a clean
    exit from the block; every other exit path, including unexpected
    exceptions, rolls back before the exception propagates.
    """

    def __init__(self, db: Session, deadline: Optional[Deadline] = None, name: str = "unit_of_work"):
        self.db = db
        self.deadline = deadline
        self.name = name
        self.committed = False

        self.borrowers = BorrowerRepository(db)
        self.loans = LoanRepository(db)
        self.installments = InstallmentRepository(db)
        self.payments = PaymentRepository(db)

    def __enter__(self) -> "UnitOfWork":
        try:
            # Reads made before the unit may have autobegun a transaction; join it
            if not self.db.in_transaction():
                self.db.begin()
        except SQLAlchemyError as e:
            raise TransactionError(f"{self.name}: could not begin transaction") from e
        logging.debug("Transaction started", extra={"unit": self.name})
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            try:
                self.commit()
            except BaseException as commit_exc:
                self._rollback_after(commit_exc)
                raise
            return False

        self._rollback_after(exc)
        return False

    def checkpoint(self, step: str) -> None:
        """Abort the unit if the workflow deadline has passed"""
        if self.deadline is not None:
            self.deadline.check(f"{self.name}:{step}")

    def commit(self) -> None:
        self.checkpoint("commit")
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            raise TransactionError(f"{self.name}: commit failed: {e}") from e
        self.committed = True
        logging.debug("Transaction committed", extra={"unit": self.name})

    def rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            raise TransactionError(f"{self.name}: rollback failed: {e}") from e

    def _rollback_after(self, cause: BaseException) -> None:
        """Roll back because of `cause`; the caller re-raises `cause`"""
        rollback_counter.labels(unit=self.name).inc()
        logging.warning(
            f"Transaction rolled back: {cause!r}",
            extra={"unit": self.name, "error_type": type(cause).__name__},
        )
        try:
            self.rollback()
        except TransactionError as e:
            # The originating error is the one the caller must see
            logging.error(f"{e}", extra={"unit": self.name})
