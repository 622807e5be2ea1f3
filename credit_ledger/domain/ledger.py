"""Per-loan settlement logic - repaid totals and paid/overdue/pending status"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Tuple

from credit_ledger.domain.access import found_or_raise, scoped_records
from credit_ledger.domain.exceptions import NotFoundError, ValidationError
from credit_ledger.domain.models import Loan, LoanRecord, LoanStatus, LoanView, Repayment
from credit_ledger.domain.repository import LedgerRepository

ZERO = Decimal("0")


def total_repaid(repayments: Iterable[Repayment]) -> Decimal:
    """Sum repayment amounts; order of arrival doesn't matter"""
    total = ZERO
    for repayment in repayments:
        if repayment.amount < 0:
            raise ValidationError(f"Repayment {repayment.id} has a negative amount")
        total += repayment.amount
    return total


def status_and_repaid(loan: Loan, repayments: Iterable[Repayment], today: date) -> Tuple[Decimal, LoanStatus]:
    """
    Derive how much has been repaid on a loan and its settlement status.

    Priority chain:
    1. Repaid in full → paid (even when past the due date)
    2. Past the due date → overdue
    3. Otherwise → pending

    Raises:
        ValidationError: non-positive principal or a negative repayment
    """
    if loan.loan_amount <= 0:
        raise ValidationError(f"Loan {loan.id} has a non-positive amount")

    repaid = total_repaid(repayments)

    if repaid >= loan.loan_amount:
        return repaid, LoanStatus.PAID
    elif today > loan.due_date:
        return repaid, LoanStatus.OVERDUE
    else:
        return repaid, LoanStatus.PENDING


def outstanding_balance(loan: Loan, repaid: Decimal) -> Decimal:
    """Principal still owed; overpayment never goes negative"""
    return max(loan.loan_amount - repaid, ZERO)


def build_loan_view(record: LoanRecord, today: date, include_repayments: bool = False) -> LoanView:
    repaid, status = status_and_repaid(record.loan, record.repayments, today)
    repayments = sorted(record.repayments, key=lambda r: (r.date, r.id)) if include_repayments else []
    return LoanView(
        loan=record.loan,
        customer_name=record.customer_name,
        total_repaid=repaid,
        outstanding=outstanding_balance(record.loan, repaid),
        status=status,
        repayments=repayments,
    )


def build_loan_views(records: Iterable[LoanRecord], today: date) -> List[LoanView]:
    """Views ordered by (issue_date, id) so repeated calls list rows identically"""
    ordered = sorted(records, key=lambda r: (r.loan.issue_date, r.loan.id))
    return [build_loan_view(record, today) for record in ordered]


def list_loans_for_shopkeeper(repository: LedgerRepository, shopkeeper_id: str, today: date) -> List[LoanView]:
    """Every loan the shopkeeper owns, with customer name, repaid total and status"""
    records = scoped_records(repository.list_loans(shopkeeper_id), shopkeeper_id)
    return build_loan_views(records, today)


def get_loan(repository: LedgerRepository, shopkeeper_id: str, loan_id: int, today: date) -> LoanView:
    """
    Single loan with its repayment history.

    Raises:
        NotFoundError: loan missing, owned by someone else, or excluded as a tenant violation
    """
    record = found_or_raise(repository.get_loan(loan_id, shopkeeper_id), "Loan")
    if not scoped_records([record], shopkeeper_id):
        raise NotFoundError("Loan")
    return build_loan_view(record, today, include_repayments=True)
