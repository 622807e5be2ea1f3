"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from credit_ledger.domain.models import (
    Customer,
    CustomerFields,
    LoanFields,
    LoanView,
    OverdueAccount,
    PortfolioSummary,
    Repayment,
)
from credit_ledger.utils.date_utils import days_overdue


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


class CustomerRequest(BaseModel):
    """Request body for POST/PUT /v1/customers"""

    name: str = Field(..., min_length=1, description="Display name")
    phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None
    trust_score: Optional[int] = Field(None, ge=0, le=100)
    credit_limit: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2, description="Informational credit ceiling")

    def to_fields(self) -> CustomerFields:
        return CustomerFields(
            name=self.name,
            phone=self.phone,
            address=self.address,
            trust_score=self.trust_score,
            credit_limit=self.credit_limit,
        )


class CustomerResponse(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    trust_score: Optional[int] = None
    credit_limit: Optional[float] = None
    created_at: Optional[str] = None

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerResponse":
        return cls(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            address=customer.address,
            trust_score=customer.trust_score,
            credit_limit=_money(customer.credit_limit),
            created_at=customer.created_at.isoformat() if customer.created_at else None,
        )


class LoanRequest(BaseModel):
    """Request body for POST /v1/loans"""

    customer_id: int
    item_description: str = Field(..., min_length=1)
    loan_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Principal of the credit sale")
    issue_date: date
    due_date: date
    frequency: Optional[str] = Field(None, description="Repayment frequency, informational")

    def to_fields(self) -> LoanFields:
        return LoanFields(
            item_description=self.item_description,
            loan_amount=self.loan_amount,
            issue_date=self.issue_date,
            due_date=self.due_date,
            frequency=self.frequency,
        )


class RepaymentRequest(BaseModel):
    """Request body for POST /v1/repayments/{loan_id}"""

    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    paid_on: Optional[date] = Field(None, alias="date", description="Defaults to today")


class RepaymentResponse(BaseModel):
    id: int
    loan_id: int
    amount: float
    date: date

    @classmethod
    def from_domain(cls, repayment: Repayment) -> "RepaymentResponse":
        return cls(
            id=repayment.id,
            loan_id=repayment.loan_id,
            amount=float(repayment.amount),
            date=repayment.date,
        )


class LoanResponse(BaseModel):
    """Loan with derived settlement values"""

    id: int
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    item_description: str
    loan_amount: float
    issue_date: date
    due_date: date
    frequency: Optional[str] = None
    total_repaid: float
    outstanding: float
    status: str

    @classmethod
    def from_view(cls, view: LoanView) -> "LoanResponse":
        loan = view.loan
        return cls(
            id=loan.id,
            customer_id=loan.customer_id,
            customer_name=view.customer_name,
            item_description=loan.item_description,
            loan_amount=float(loan.loan_amount),
            issue_date=loan.issue_date,
            due_date=loan.due_date,
            frequency=loan.frequency,
            total_repaid=float(view.total_repaid),
            outstanding=float(view.outstanding),
            status=view.status.value,
        )


class LoanDetailResponse(LoanResponse):
    repayments: List[RepaymentResponse]

    @classmethod
    def from_view(cls, view: LoanView) -> "LoanDetailResponse":
        base = LoanResponse.from_view(view)
        return cls(
            **base.model_dump(),
            repayments=[RepaymentResponse.from_domain(r) for r in view.repayments],
        )


class SummaryResponse(BaseModel):
    """Response for GET /v1/summary"""

    total_loaned: float
    total_collected: float
    overdue_amount: float

    @classmethod
    def from_domain(cls, summary: PortfolioSummary) -> "SummaryResponse":
        return cls(
            total_loaned=float(summary.total_loaned),
            total_collected=float(summary.total_collected),
            overdue_amount=float(summary.overdue_amount),
        )


class OverdueItem(BaseModel):
    """Single overdue (customer, loan) pair"""

    customer_id: Optional[int] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    loan_id: int
    due_date: date
    outstanding: float
    days_overdue: int

    @classmethod
    def from_domain(cls, account: OverdueAccount, today: date) -> "OverdueItem":
        return cls(
            customer_id=account.customer_id,
            name=account.customer_name,
            phone=account.phone,
            loan_id=account.loan_id,
            due_date=account.due_date,
            outstanding=float(account.outstanding),
            days_overdue=days_overdue(account.due_date, today),
        )
