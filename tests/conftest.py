"""Pytest fixtures for testing"""

import os

os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from loan_engine.api.main import create_app
from loan_engine.domain.models import BorrowerView, LoanView
from loan_engine.infrastructure.database.models import Base
from loan_engine.infrastructure.database.session import get_db
from loan_engine.services.borrowers import BorrowerService
from loan_engine.services.loans import LoanService
from loan_engine.services.payments import PaymentService


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory() -> sessionmaker:
    """Factory for sessions independent of the `db` fixture"""
    return TestingSessionLocal


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def borrower_service(db: Session) -> BorrowerService:
    return BorrowerService(db)


@pytest.fixture
def loan_service(db: Session) -> LoanService:
    return LoanService(db)


@pytest.fixture
def payment_service(db: Session) -> PaymentService:
    return PaymentService(db)


@pytest.fixture
def borrower(borrower_service: BorrowerService) -> BorrowerView:
    """A registered borrower with no loans"""
    return borrower_service.create_borrower("Ada", "Lovelace", "ada@example.com")


@pytest.fixture
def make_loan(loan_service: LoanService, borrower: BorrowerView):
    """Factory for loans owned by the `borrower` fixture"""

    def _make_loan(
        start_date: date,
        term_weeks: int = 4,
        principal_cents: int = 100000,
        annual_interest_rate: float = 5.0,
        borrower_id: int | None = None,
    ) -> LoanView:
        return loan_service.create_loan(
            borrower_id=borrower_id or borrower.id,
            principal_cents=principal_cents,
            annual_interest_rate=annual_interest_rate,
            term_weeks=term_weeks,
            start_date=start_date,
        )

    return _make_loan
