"""Unit tests for portfolio aggregation and tenant scoping"""

import pytest
from datetime import date
from decimal import Decimal
from helpers import SHOPKEEPER_X, SHOPKEEPER_Y, TODAY, make_loan, make_record, make_repayments
from credit_ledger.domain.access import check_record, scoped_records
from credit_ledger.domain.exceptions import RepositoryFailureError, TenantViolationError
from credit_ledger.domain.models import Customer, Repayment
from credit_ledger.domain.portfolio import find_overdue, summarize


def test_summary_counts_only_outstanding_overdue_balance():
    """One overdue loan with 300 outstanding and one pending loan"""
    overdue = make_loan(loan_id=1, loan_amount="500", due_date=date(2024, 1, 10))
    pending = make_loan(loan_id=2, loan_amount="800", due_date=date(2024, 3, 1))
    records = [
        make_record(overdue, make_repayments(1, "200")),
        make_record(pending, make_repayments(2, "100")),
    ]

    summary = summarize(records, TODAY)

    assert summary.total_loaned == Decimal("1300")
    assert summary.total_collected == Decimal("300")
    assert summary.overdue_amount == Decimal("300")


def test_overdue_accounts_one_row_for_overdue_loan():
    overdue = make_loan(loan_id=1, loan_amount="500", due_date=date(2024, 1, 10))
    pending = make_loan(loan_id=2, loan_amount="800", due_date=date(2024, 3, 1))
    records = [
        make_record(overdue, make_repayments(1, "200")),
        make_record(pending),
    ]

    accounts = find_overdue(records, TODAY)

    assert len(accounts) == 1
    assert accounts[0].loan_id == 1
    assert accounts[0].customer_name == "Asha"
    assert accounts[0].phone == "555-0101"
    assert accounts[0].outstanding == Decimal("300")


def test_summary_of_empty_portfolio_is_zero():
    summary = summarize([], TODAY)

    assert summary.total_loaned == Decimal("0")
    assert summary.total_collected == Decimal("0")
    assert summary.overdue_amount == Decimal("0")


def test_paid_loan_past_due_contributes_nothing_overdue():
    loan = make_loan(loan_amount="1000", due_date=date(2024, 1, 10))

    summary = summarize([make_record(loan, make_repayments(1, "700", "300"))], TODAY)

    assert summary.overdue_amount == Decimal("0")
    assert find_overdue([make_record(loan, make_repayments(1, "700", "300"))], TODAY) == []


def test_customer_with_two_overdue_loans_appears_twice():
    customer = Customer(id=9, owner_id=SHOPKEEPER_X, name="Ravi", phone="555-0199")
    records = [
        make_record(make_loan(loan_id=1, customer_id=9, due_date=date(2024, 1, 20)), customer=customer),
        make_record(make_loan(loan_id=2, customer_id=9, due_date=date(2024, 1, 5)), customer=customer),
    ]

    accounts = find_overdue(records, TODAY)

    assert [a.loan_id for a in accounts] == [2, 1]
    assert {a.customer_id for a in accounts} == {9}


def test_loan_of_deleted_customer_still_counts():
    orphan = make_loan(loan_id=4, customer_id=None, loan_amount="250", due_date=date(2024, 1, 1))
    record = make_record(orphan, with_customer=False)

    summary = summarize([record], TODAY)
    accounts = find_overdue([record], TODAY)

    assert summary.overdue_amount == Decimal("250")
    assert accounts[0].customer_id is None
    assert accounts[0].customer_name is None


@pytest.mark.parametrize(
    "amounts",
    [[], ["100"], ["999.99"], ["1000"], ["1500"], ["250", "250", "250"]],
)
def test_overdue_never_exceeds_uncollected(amounts):
    records = [
        make_record(make_loan(loan_id=1, loan_amount="1000", due_date=date(2024, 1, 1)), make_repayments(1, *amounts)),
        make_record(make_loan(loan_id=2, loan_amount="400", due_date=date(2024, 1, 1)), make_repayments(2, "100")),
        make_record(make_loan(loan_id=3, loan_amount="300", due_date=date(2024, 6, 1))),
    ]

    summary = summarize(records, TODAY)

    assert summary.overdue_amount <= summary.total_loaned - summary.total_collected


def test_foreign_customer_loan_is_excluded_as_tenant_violation():
    foreign_customer = Customer(id=2, owner_id=SHOPKEEPER_Y, name="Mallory")
    good = make_record(make_loan(loan_id=1, loan_amount="100"))
    bad = make_record(make_loan(loan_id=2, loan_amount="900", customer_id=2), customer=foreign_customer)

    with pytest.raises(TenantViolationError):
        check_record(bad, SHOPKEEPER_X)

    kept = scoped_records([good, bad], SHOPKEEPER_X)
    assert [r.loan.id for r in kept] == [1]
    assert summarize(kept, TODAY).total_loaned == Decimal("100")


def test_loan_from_other_shopkeeper_is_repository_failure():
    """The repository must have filtered this out; the core refuses to total it"""
    stray = make_record(make_loan(owner_id=SHOPKEEPER_Y))

    with pytest.raises(RepositoryFailureError):
        scoped_records([stray], SHOPKEEPER_X)


def test_repayment_for_another_loan_is_repository_failure():
    record = make_record(make_loan(loan_id=1))
    record.repayments.append(Repayment(id=1, loan_id=99, amount=Decimal("5"), date=TODAY))

    with pytest.raises(RepositoryFailureError):
        scoped_records([record], SHOPKEEPER_X)
