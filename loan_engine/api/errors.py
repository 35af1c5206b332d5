"""Map domain exceptions to HTTP responses"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loan_engine.api.dependencies import get_request_id
from loan_engine.domain.exceptions import (
    AmountMismatchError,
    DomainException,
    LedgerInvariantError,
    NoRowsAffectedError,
    NotFoundError,
    TransactionError,
    ValidationError,
    WorkflowTimeoutError,
)

# Checked in order; subclasses before their bases
STATUS_BY_EXCEPTION = [
    (NotFoundError, 404),
    (ValidationError, 400),
    (AmountMismatchError, 422),
    (NoRowsAffectedError, 409),
    (LedgerInvariantError, 409),
    (WorkflowTimeoutError, 504),
    (TransactionError, 503),
]


def status_for(exc: DomainException) -> int:
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return 500


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    request_id = get_request_id(request)
    if status_code >= 500:
        logging.error(f"{type(exc).__name__}: {exc}", extra={"request_id": request_id})
    else:
        logging.warning(f"{type(exc).__name__}: {exc}", extra={"request_id": request_id})
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logging.error(f"Unexpected error: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
