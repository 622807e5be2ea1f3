"""Storage contract the ledger core reads and writes through

Every method takes the owning shopkeeper's id and must filter on it natively;
the core never fetches another tenant's rows to discard them afterwards.
Implementations raise RepositoryFailureError when storage is unavailable.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Protocol

from credit_ledger.domain.models import Customer, CustomerFields, Loan, LoanFields, LoanRecord, Repayment


class LedgerRepository(Protocol):
    def get_customer(self, customer_id: int, owner_id: str) -> Optional[Customer]:
        ...

    def list_customers(self, owner_id: str) -> List[Customer]:
        ...

    def create_customer(self, owner_id: str, fields: CustomerFields) -> Customer:
        ...

    def update_customer(self, customer_id: int, owner_id: str, fields: CustomerFields) -> Optional[Customer]:
        ...

    def delete_customer(self, customer_id: int, owner_id: str) -> bool:
        ...

    def create_loan(self, owner_id: str, customer_id: int, fields: LoanFields) -> Optional[Loan]:
        """Insert a loan, or return None when the customer isn't owned by owner_id.

        Ownership must be checked inside the same write.
        """
        ...

    def get_loan(self, loan_id: int, owner_id: str) -> Optional[LoanRecord]:
        ...

    def list_loans(self, owner_id: str) -> List[LoanRecord]:
        ...

    def create_repayment(self, loan_id: int, owner_id: str, amount: Decimal, paid_on: date) -> Optional[Repayment]:
        """Append a repayment, or return None when the loan isn't owned by owner_id"""
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
