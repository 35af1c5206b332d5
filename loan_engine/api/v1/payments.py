"""Payment endpoints: due-amount quote and payment application"""

from fastapi import APIRouter, Depends

from loan_engine.api.v1.schemas import DueQuoteResponse, PaymentRequest, PaymentResponse
from loan_engine.api.dependencies import get_payment_service
from loan_engine.services.payments import PaymentService

router = APIRouter()


@router.get("/payments/{loan_id}", response_model=DueQuoteResponse)
def quote_due(loan_id: int, service: PaymentService = Depends(get_payment_service)):
    """
    Installments currently due on a loan and the exact amount to pay.

    Installments falling due after today are not included.
    """
    return DueQuoteResponse.model_validate(service.quote_due(loan_id))


@router.post("/payments/{loan_id}", response_model=PaymentResponse)
def make_payment(
    loan_id: int,
    request_body: PaymentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Pay everything currently due on a loan.

    The amount must equal the quoted total exactly; anything else is
    rejected with 422 and nothing is recorded.
    """
    receipt = service.apply_payment(
        loan_id=loan_id,
        installment_ids=request_body.installment_ids,
        amount_cents=request_body.amount_cents,
    )
    return PaymentResponse.model_validate(receipt)
