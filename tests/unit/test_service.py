"""Unit tests for LedgerService against an in-test repository double"""

import pytest
from datetime import date
from decimal import Decimal
from helpers import SHOPKEEPER_X, TODAY, make_loan, make_record
from credit_ledger.domain.exceptions import (
    NotFoundError,
    RepositoryFailureError,
    UnauthenticatedError,
    ValidationError,
)
from credit_ledger.domain.models import Customer, CustomerFields, LoanFields, LoanStatus, Repayment
from credit_ledger.domain.service import LedgerService


class StubRepository:
    """Records calls and returns canned results"""

    def __init__(self, records=None, owned_customer=True, owned_loan=True, fail_on_write=False):
        self.records = records or []
        self.owned_customer = owned_customer
        self.owned_loan = owned_loan
        self.fail_on_write = fail_on_write
        self.commits = 0
        self.rollbacks = 0
        self.owner_ids = []

    def get_customer(self, customer_id, owner_id):
        self.owner_ids.append(owner_id)
        return Customer(id=customer_id, owner_id=owner_id, name="Asha") if self.owned_customer else None

    def list_customers(self, owner_id):
        self.owner_ids.append(owner_id)
        return []

    def create_customer(self, owner_id, fields):
        self.owner_ids.append(owner_id)
        return Customer(id=1, owner_id=owner_id, name=fields.name)

    def update_customer(self, customer_id, owner_id, fields):
        self.owner_ids.append(owner_id)
        return Customer(id=customer_id, owner_id=owner_id, name=fields.name) if self.owned_customer else None

    def delete_customer(self, customer_id, owner_id):
        self.owner_ids.append(owner_id)
        return self.owned_customer

    def create_loan(self, owner_id, customer_id, fields):
        self.owner_ids.append(owner_id)
        if not self.owned_customer:
            return None
        return make_loan(customer_id=customer_id, loan_amount=str(fields.loan_amount))

    def get_loan(self, loan_id, owner_id):
        self.owner_ids.append(owner_id)
        return next((r for r in self.records if r.loan.id == loan_id), None)

    def list_loans(self, owner_id):
        self.owner_ids.append(owner_id)
        return list(self.records)

    def create_repayment(self, loan_id, owner_id, amount, paid_on):
        self.owner_ids.append(owner_id)
        if self.fail_on_write:
            raise RepositoryFailureError("database unavailable")
        if not self.owned_loan:
            return None
        return Repayment(id=1, loan_id=loan_id, amount=amount, date=paid_on)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


def test_blank_shopkeeper_is_rejected():
    with pytest.raises(UnauthenticatedError):
        LedgerService(StubRepository(), "  ")


def test_every_call_is_scoped_to_the_shopkeeper():
    repo = StubRepository(records=[make_record(make_loan())])
    service = LedgerService(repo, SHOPKEEPER_X)

    service.list_customers()
    service.list_loans(TODAY)
    service.summary(TODAY)
    service.overdue_accounts(TODAY)
    service.record_repayment(1, "5", TODAY)

    assert set(repo.owner_ids) == {SHOPKEEPER_X}


def test_create_loan_for_unowned_customer_is_not_found():
    repo = StubRepository(owned_customer=False)
    service = LedgerService(repo, SHOPKEEPER_X)
    fields = LoanFields(item_description="Flour", loan_amount=Decimal("50"), issue_date=date(2024, 1, 1), due_date=date(2024, 2, 1))

    with pytest.raises(NotFoundError) as exc_info:
        service.create_loan(42, fields)

    assert str(exc_info.value) == "Customer not found"
    assert repo.rollbacks == 1
    assert repo.commits == 0


def test_repayment_on_unowned_loan_is_not_found():
    repo = StubRepository(owned_loan=False)
    service = LedgerService(repo, SHOPKEEPER_X)

    with pytest.raises(NotFoundError) as exc_info:
        service.record_repayment(7, "10", TODAY)

    assert str(exc_info.value) == "Loan not found"
    assert repo.rollbacks == 1


def test_negative_repayment_never_reaches_repository():
    repo = StubRepository()
    service = LedgerService(repo, SHOPKEEPER_X)

    with pytest.raises(ValidationError):
        service.record_repayment(1, "-10", TODAY)

    assert repo.owner_ids == []


def test_repository_failure_is_propagated_after_rollback():
    repo = StubRepository(fail_on_write=True)
    service = LedgerService(repo, SHOPKEEPER_X)

    with pytest.raises(RepositoryFailureError):
        service.record_repayment(1, "10", TODAY)

    assert repo.rollbacks == 1
    assert repo.commits == 0


def test_successful_write_commits():
    repo = StubRepository()
    service = LedgerService(repo, SHOPKEEPER_X)

    repayment = service.record_repayment(1, "10.25", "2024-01-15")

    assert repayment.amount == Decimal("10.25")
    assert repayment.date == date(2024, 1, 15)
    assert repo.commits == 1


def test_delete_unowned_customer_is_not_found():
    service = LedgerService(StubRepository(owned_customer=False), SHOPKEEPER_X)

    with pytest.raises(NotFoundError):
        service.delete_customer(3)
    with pytest.raises(NotFoundError):
        service.update_customer(3, CustomerFields(name="Asha"))
    with pytest.raises(NotFoundError):
        service.get_customer(3)


def test_get_loan_missing_is_not_found():
    service = LedgerService(StubRepository(), SHOPKEEPER_X)

    with pytest.raises(NotFoundError):
        service.get_loan(1, TODAY)


def test_get_loan_returns_view():
    service = LedgerService(StubRepository(records=[make_record(make_loan(loan_id=5))]), SHOPKEEPER_X)

    view = service.get_loan(5, TODAY)

    assert view.loan.id == 5
    assert view.status is LoanStatus.OVERDUE
