"""SQLAlchemy ORM models for borrowers, loans, installments and payments"""

from sqlalchemy import Column, String, BigInteger, Boolean, Float, DateTime, Date, Integer, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Borrower(Base):
    """Loan applicant; never modified after creation"""

    __tablename__ = "borrower"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(String(320), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Loan(Base):
    """Fixed-rate weekly loan with a running outstanding balance"""

    __tablename__ = "loan"

    id = Column(Integer, primary_key=True, autoincrement=True)
    borrower_id = Column(Integer, ForeignKey("borrower.id"), nullable=False, index=True)
    principal_cents = Column(BigInteger, nullable=False)
    annual_interest_rate = Column(Float, nullable=False)
    term_weeks = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    # Set from the generated schedule before the creating transaction commits
    outstanding_cents = Column(BigInteger, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    installments = relationship(
        "Installment",
        back_populates="loan",
        order_by="Installment.due_date",
    )
    payments = relationship("Payment", back_populates="loan", order_by="Payment.id")


class Installment(Base):
    """One weekly due amount of a loan's schedule"""

    __tablename__ = "installment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(Integer, ForeignKey("loan.id"), nullable=False, index=True)
    due_date = Column(Date, nullable=False)
    due_amount_cents = Column(BigInteger, nullable=False)
    paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    loan = relationship("Loan", back_populates="installments")


class Payment(Base):
    """Append-only record of a settled due amount"""

    __tablename__ = "payment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(Integer, ForeignKey("loan.id"), nullable=False, index=True)
    amount_cents = Column(BigInteger, nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=False)

    loan = relationship("Loan", back_populates="payments")
