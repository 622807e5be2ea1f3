"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class LoanStatus(str, Enum):
    """Settlement status derived on every read"""

    PAID = "paid"
    OVERDUE = "overdue"
    PENDING = "pending"


@dataclass
class Customer:
    """Customer buying on credit from one shopkeeper"""

    id: int
    owner_id: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    trust_score: Optional[int] = None
    credit_limit: Optional[Decimal] = None
    created_at: Optional[datetime] = None


@dataclass
class Loan:
    """One credit sale"""

    id: int
    customer_id: Optional[int]  # None once the customer record is deleted
    owner_id: str
    item_description: str
    loan_amount: Decimal
    issue_date: date
    due_date: date
    frequency: Optional[str] = None  # informational only
    created_at: Optional[datetime] = None


@dataclass
class Repayment:
    """Money received against a single loan"""

    id: int
    loan_id: int
    amount: Decimal
    date: date
    created_at: Optional[datetime] = None


@dataclass
class LoanRecord:
    """Loan as returned by the repository, with its customer and repayments"""

    loan: Loan
    customer: Optional[Customer]
    repayments: List[Repayment] = field(default_factory=list)

    @property
    def customer_name(self) -> Optional[str]:
        return self.customer.name if self.customer else None


@dataclass
class LoanView:
    """Loan fields plus derived settlement values"""

    loan: Loan
    customer_name: Optional[str]
    total_repaid: Decimal
    outstanding: Decimal
    status: LoanStatus
    repayments: List[Repayment] = field(default_factory=list)


@dataclass
class PortfolioSummary:
    """Cross-loan totals for one shopkeeper"""

    total_loaned: Decimal
    total_collected: Decimal
    overdue_amount: Decimal


@dataclass
class OverdueAccount:
    """One overdue (customer, loan) pair for alerting"""

    customer_id: Optional[int]
    customer_name: Optional[str]
    phone: Optional[str]
    loan_id: int
    due_date: date
    outstanding: Decimal


@dataclass
class CustomerFields:
    """Writable customer attributes"""

    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    trust_score: Optional[int] = None
    credit_limit: Optional[Decimal] = None


@dataclass
class LoanFields:
    """Attributes supplied when a credit sale is recorded"""

    item_description: str
    loan_amount: Decimal
    issue_date: date
    due_date: date
    frequency: Optional[str] = None
