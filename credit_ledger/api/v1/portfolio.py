"""GET /v1/summary and GET /v1/overdue - portfolio totals and overdue alerts"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends

from credit_ledger.api.dependencies import get_ledger_service, get_today
from credit_ledger.api.v1.schemas import OverdueItem, SummaryResponse
from credit_ledger.domain.service import LedgerService

router = APIRouter()


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    service: LedgerService = Depends(get_ledger_service),
    today: date = Depends(get_today),
):
    """
    Portfolio totals for the caller.

    Returns:
        total_loaned, total_collected and the outstanding balance of overdue loans
    """
    return SummaryResponse.from_domain(service.summary(today))


@router.get("/overdue", response_model=List[OverdueItem])
def get_overdue(
    service: LedgerService = Depends(get_ledger_service),
    today: date = Depends(get_today),
):
    """One row per overdue loan, for reminder/alerting consumers"""
    return [OverdueItem.from_domain(account, today) for account in service.overdue_accounts(today)]
