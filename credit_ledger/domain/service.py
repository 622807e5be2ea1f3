"""Ledger operations for one authenticated shopkeeper"""

from contextlib import contextmanager
from datetime import date
from typing import Any, Iterator, List

from credit_ledger.domain import ledger, portfolio
from credit_ledger.domain.access import found_or_raise, require_shopkeeper
from credit_ledger.domain.exceptions import NotFoundError
from credit_ledger.domain.models import (
    Customer,
    CustomerFields,
    Loan,
    LoanFields,
    LoanView,
    OverdueAccount,
    PortfolioSummary,
    Repayment,
)
from credit_ledger.domain.repository import LedgerRepository
from credit_ledger.domain.validation import (
    parse_date,
    parse_money,
    validate_customer_fields,
    validate_loan_fields,
)


class LedgerService:
    """
    Entry point used by the HTTP layer.

    Every call is scoped to `shopkeeper_id`. Writes validate their input first,
    then let the repository re-check ownership of referenced rows inside the
    same transaction; a missing or foreign row surfaces as NotFoundError.
    """

    def __init__(self, repository: LedgerRepository, shopkeeper_id: str):
        self.repository = repository
        self.shopkeeper_id = require_shopkeeper(shopkeeper_id)

    @contextmanager
    def _unit_of_work(self) -> Iterator[None]:
        try:
            yield
            self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise

    # Customers

    def list_customers(self) -> List[Customer]:
        return self.repository.list_customers(self.shopkeeper_id)

    def get_customer(self, customer_id: int) -> Customer:
        return found_or_raise(self.repository.get_customer(customer_id, self.shopkeeper_id), "Customer")

    def create_customer(self, fields: CustomerFields) -> Customer:
        fields = validate_customer_fields(fields)
        with self._unit_of_work():
            return self.repository.create_customer(self.shopkeeper_id, fields)

    def update_customer(self, customer_id: int, fields: CustomerFields) -> Customer:
        fields = validate_customer_fields(fields)
        with self._unit_of_work():
            customer = self.repository.update_customer(customer_id, self.shopkeeper_id, fields)
            return found_or_raise(customer, "Customer")

    def delete_customer(self, customer_id: int) -> None:
        with self._unit_of_work():
            if not self.repository.delete_customer(customer_id, self.shopkeeper_id):
                raise NotFoundError("Customer")

    # Loans and repayments

    def create_loan(self, customer_id: int, fields: LoanFields) -> Loan:
        fields = validate_loan_fields(fields)
        with self._unit_of_work():
            loan = self.repository.create_loan(self.shopkeeper_id, customer_id, fields)
            return found_or_raise(loan, "Customer")

    def record_repayment(self, loan_id: int, amount: Any, paid_on: Any) -> Repayment:
        value = parse_money(amount, "amount")
        day = parse_date(paid_on, "date")
        with self._unit_of_work():
            repayment = self.repository.create_repayment(loan_id, self.shopkeeper_id, value, day)
            return found_or_raise(repayment, "Loan")

    def list_loans(self, today: date) -> List[LoanView]:
        return ledger.list_loans_for_shopkeeper(self.repository, self.shopkeeper_id, today)

    def get_loan(self, loan_id: int, today: date) -> LoanView:
        return ledger.get_loan(self.repository, self.shopkeeper_id, loan_id, today)

    # Portfolio

    def summary(self, today: date) -> PortfolioSummary:
        return portfolio.summary(self.repository, self.shopkeeper_id, today)

    def overdue_accounts(self, today: date) -> List[OverdueAccount]:
        return portfolio.overdue_accounts(self.repository, self.shopkeeper_id, today)
