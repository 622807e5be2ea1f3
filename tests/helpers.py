"""Shared constants and domain builders for tests"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from credit_ledger.domain.models import Customer, Loan, LoanRecord, Repayment

TODAY = date(2024, 2, 1)
SHOPKEEPER_X = "shopkeeper-x"
SHOPKEEPER_Y = "shopkeeper-y"


def auth_headers(shopkeeper_id: str) -> dict:
    return {"X-Shopkeeper-ID": shopkeeper_id}


def make_loan(
    loan_id: int = 1,
    loan_amount: str = "1000",
    due_date: date = date(2024, 1, 10),
    owner_id: str = SHOPKEEPER_X,
    customer_id: Optional[int] = 1,
    issue_date: date = date(2024, 1, 1),
) -> Loan:
    return Loan(
        id=loan_id,
        customer_id=customer_id,
        owner_id=owner_id,
        item_description="Rice sack",
        loan_amount=Decimal(loan_amount),
        issue_date=issue_date,
        due_date=due_date,
    )


def make_repayments(loan_id: int, *amounts: str, paid_on: date = date(2024, 1, 5)) -> List[Repayment]:
    return [
        Repayment(id=loan_id * 100 + i, loan_id=loan_id, amount=Decimal(amount), date=paid_on)
        for i, amount in enumerate(amounts)
    ]


def make_record(
    loan: Loan,
    repayments: Optional[List[Repayment]] = None,
    customer: Optional[Customer] = None,
    with_customer: bool = True,
) -> LoanRecord:
    if customer is None and with_customer:
        customer = Customer(id=loan.customer_id or 1, owner_id=loan.owner_id, name="Asha", phone="555-0101")
    return LoanRecord(loan=loan, customer=customer, repayments=repayments or [])
