"""/v1/loans - credit sales with derived repaid totals and status"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Request

from credit_ledger.api.dependencies import get_ledger_service, get_request_id, get_today
from credit_ledger.api.v1.schemas import LoanDetailResponse, LoanRequest, LoanResponse
from credit_ledger.domain.service import LedgerService
from credit_ledger.infrastructure.observability.logging import log_mutation
from credit_ledger.infrastructure.observability.metrics import record_loan

router = APIRouter()


@router.post("/loans", response_model=LoanResponse, status_code=201)
def create_loan(
    request_body: LoanRequest,
    request: Request,
    service: LedgerService = Depends(get_ledger_service),
    today: date = Depends(get_today),
):
    """
    Record a credit sale for one of the caller's customers.

    Returns 404 when the customer doesn't exist or belongs to another shopkeeper.
    """
    loan = service.create_loan(request_body.customer_id, request_body.to_fields())

    record_loan(loan.loan_amount)
    log_mutation(get_request_id(request), service.shopkeeper_id, "loan", "create", loan.id)

    return LoanResponse.from_view(service.get_loan(loan.id, today))


@router.get("/loans", response_model=List[LoanResponse])
def list_loans(
    service: LedgerService = Depends(get_ledger_service),
    today: date = Depends(get_today),
):
    """All of the caller's loans with customer name, total repaid and status"""
    return [LoanResponse.from_view(view) for view in service.list_loans(today)]


@router.get("/loans/{loan_id}", response_model=LoanDetailResponse)
def get_loan(
    loan_id: int,
    service: LedgerService = Depends(get_ledger_service),
    today: date = Depends(get_today),
):
    return LoanDetailResponse.from_view(service.get_loan(loan_id, today))
