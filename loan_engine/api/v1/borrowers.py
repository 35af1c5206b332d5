"""Borrower endpoints: registration and delinquency status"""

from fastapi import APIRouter, Depends

from loan_engine.api.v1.schemas import BorrowerCreateRequest, BorrowerResponse, DelinquencyResponse
from loan_engine.api.dependencies import get_borrower_service
from loan_engine.services.borrowers import BorrowerService

router = APIRouter()


@router.post("/borrowers", response_model=BorrowerResponse, status_code=201)
def create_borrower(
    request_body: BorrowerCreateRequest,
    service: BorrowerService = Depends(get_borrower_service),
):
    """Register a borrower"""
    borrower = service.create_borrower(
        first_name=request_body.first_name,
        last_name=request_body.last_name,
        email=request_body.email,
    )
    return BorrowerResponse.model_validate(borrower)


@router.get("/borrowers/{borrower_id}/status", response_model=DelinquencyResponse)
def get_delinquency_status(
    borrower_id: int,
    service: BorrowerService = Depends(get_borrower_service),
):
    """
    Whether the borrower is delinquent.

    Returns 404 when the borrower does not exist or has never taken a loan.
    """
    return DelinquencyResponse(
        borrower_id=borrower_id,
        is_delinquent=service.is_delinquent(borrower_id),
    )
