"""POST /v1/repayments/{loan_id} - record money received against a loan"""

from datetime import date

from fastapi import APIRouter, Depends, Request

from credit_ledger.api.dependencies import get_ledger_service, get_request_id, get_today
from credit_ledger.api.v1.schemas import RepaymentRequest, RepaymentResponse
from credit_ledger.domain.service import LedgerService
from credit_ledger.infrastructure.observability.logging import log_mutation
from credit_ledger.infrastructure.observability.metrics import record_repayment

router = APIRouter()


@router.post("/repayments/{loan_id}", response_model=RepaymentResponse, status_code=201)
def create_repayment(
    loan_id: int,
    request_body: RepaymentRequest,
    request: Request,
    service: LedgerService = Depends(get_ledger_service),
    today: date = Depends(get_today),
):
    """
    Append a repayment.

    Loan ownership is re-checked inside the insert transaction; a loan owned
    by another shopkeeper gets the same 404 as a missing one.
    """
    repayment = service.record_repayment(loan_id, request_body.amount, request_body.paid_on or today)

    record_repayment(repayment.amount)
    log_mutation(get_request_id(request), service.shopkeeper_id, "repayment", "create", repayment.id)
    return RepaymentResponse.from_domain(repayment)
