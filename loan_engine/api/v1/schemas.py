"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import List, Optional


class BorrowerCreateRequest(BaseModel):
    """Request body for POST /v1/borrowers"""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")


class BorrowerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    created_at: Optional[datetime] = None


class DelinquencyResponse(BaseModel):
    """Response for GET /v1/borrowers/{borrower_id}/status"""

    borrower_id: int
    is_delinquent: bool


class LoanCreateRequest(BaseModel):
    """Request body for POST /v1/loans"""

    borrower_id: int = Field(..., gt=0, description="Borrower identifier")
    principal_cents: int = Field(..., gt=0, description="Amount lent in cents")
    annual_interest_rate: float = Field(..., ge=0, description="Yearly rate in percent, e.g. 5.0")
    term_weeks: int = Field(..., gt=0, description="Number of weekly installments")
    start_date: date = Field(..., description="First installment falls due one week later")


class InstallmentSchema(BaseModel):
    """Single installment in a loan schedule"""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    due_date: date
    due_amount_cents: int
    paid: bool = False


class LoanResponse(BaseModel):
    """Response for POST /v1/loans"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    borrower_id: int
    principal_cents: int
    annual_interest_rate: float
    term_weeks: int
    start_date: date
    outstanding_cents: int
    installments: List[InstallmentSchema]
    created_at: Optional[datetime] = None


class LoanDetailsResponse(LoanResponse):
    """Response for GET /v1/loans/{loan_id}"""

    borrower: BorrowerResponse


class OutstandingResponse(BaseModel):
    """Response for GET /v1/loans/{loan_id}/outstanding"""

    loan_id: int
    outstanding_cents: int


class DueQuoteResponse(BaseModel):
    """Response for GET /v1/payments/{loan_id}"""

    model_config = ConfigDict(from_attributes=True)

    loan_id: int
    total_due_cents: int
    installments: List[InstallmentSchema]


class PaymentRequest(BaseModel):
    """Request body for POST /v1/payments/{loan_id}"""

    installment_ids: List[int] = Field(..., min_length=1, description="Installments being settled")
    amount_cents: int = Field(..., gt=0, description="Must equal the total currently due")


class PaymentResponse(BaseModel):
    """Response for POST /v1/payments/{loan_id}"""

    model_config = ConfigDict(from_attributes=True)

    message: str = "payment success"
    payment_id: int
    loan_id: int
    amount_cents: int
    installments_paid: int
    outstanding_cents: int
    paid_at: datetime
