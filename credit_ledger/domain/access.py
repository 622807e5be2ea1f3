"""Tenant scoping checks applied around repository reads and writes"""

from typing import Iterable, List, Optional, TypeVar

from credit_ledger.domain.exceptions import (
    NotFoundError,
    RepositoryFailureError,
    TenantViolationError,
    UnauthenticatedError,
)
from credit_ledger.domain.models import LoanRecord
from credit_ledger.infrastructure.observability.logging import log_tenant_violation
from credit_ledger.infrastructure.observability.metrics import (
    repository_failure_counter,
    tenant_violation_counter,
)

T = TypeVar("T")


def require_shopkeeper(shopkeeper_id: Optional[str]) -> str:
    """Reject a missing or blank caller identity (HTTP 401) before touching storage"""
    if shopkeeper_id is None or not shopkeeper_id.strip():
        raise UnauthenticatedError("shopkeeper identity is required")
    return shopkeeper_id.strip()


def found_or_raise(entity: Optional[T], entity_name: str) -> T:
    """Turn a missing (or foreign, which the repository reports as missing) entity into NotFoundError"""
    if entity is None:
        raise NotFoundError(entity_name)
    return entity


def check_record(record: LoanRecord, shopkeeper_id: str) -> None:
    """
    Validate one repository row against the caller's tenancy.

    Raises:
        RepositoryFailureError: the repository returned a loan it should have filtered
            out, or repayments belonging to a different loan
        TenantViolationError: the loan's customer belongs to another shopkeeper
    """
    loan = record.loan
    if loan.owner_id != shopkeeper_id:
        repository_failure_counter.inc()
        raise RepositoryFailureError(f"Repository returned loan {loan.id} outside the requested tenant")

    for repayment in record.repayments:
        if repayment.loan_id != loan.id:
            repository_failure_counter.inc()
            raise RepositoryFailureError(
                f"Repository returned repayment {repayment.id} under loan {loan.id}"
            )

    # A deleted customer leaves customer=None; the loan still belongs to its owner.
    if record.customer is not None and record.customer.owner_id != loan.owner_id:
        raise TenantViolationError(loan.id, loan.owner_id, record.customer.owner_id)


def scoped_records(records: Iterable[LoanRecord], shopkeeper_id: str) -> List[LoanRecord]:
    """Drop tenant-violating loans (logging each) so they never reach a total"""
    kept = []
    for record in records:
        try:
            check_record(record, shopkeeper_id)
        except TenantViolationError as e:
            tenant_violation_counter.inc()
            log_tenant_violation(e.loan_id, e.loan_owner_id, e.customer_owner_id)
            continue
        kept.append(record)
    return kept
