"""Loan endpoints: origination, details and outstanding balance"""

from fastapi import APIRouter, Depends

from loan_engine.api.v1.schemas import (
    BorrowerResponse,
    LoanCreateRequest,
    LoanDetailsResponse,
    LoanResponse,
    OutstandingResponse,
)
from loan_engine.api.dependencies import get_loan_service
from loan_engine.services.loans import LoanService

router = APIRouter()


@router.post("/loans", response_model=LoanResponse, status_code=201)
def create_loan(
    request_body: LoanCreateRequest,
    service: LoanService = Depends(get_loan_service),
):
    """
    Create a loan and its weekly installment schedule.

    The loan and all of its installments are stored together or not at all.
    """
    loan = service.create_loan(
        borrower_id=request_body.borrower_id,
        principal_cents=request_body.principal_cents,
        annual_interest_rate=request_body.annual_interest_rate,
        term_weeks=request_body.term_weeks,
        start_date=request_body.start_date,
    )
    return LoanResponse.model_validate(loan)


@router.get("/loans/{loan_id}", response_model=LoanDetailsResponse)
def get_loan_details(loan_id: int, service: LoanService = Depends(get_loan_service)):
    """Loan with borrower and full schedule"""
    details = service.get_loan_details(loan_id)
    loan = LoanResponse.model_validate(details.loan)
    return LoanDetailsResponse(
        **loan.model_dump(),
        borrower=BorrowerResponse.model_validate(details.borrower),
    )


@router.get("/loans/{loan_id}/outstanding", response_model=OutstandingResponse)
def get_outstanding(loan_id: int, service: LoanService = Depends(get_loan_service)):
    return OutstandingResponse(
        loan_id=loan_id,
        outstanding_cents=service.get_outstanding_amount(loan_id),
    )
