"""Prometheus metrics for ledger activity, data-integrity faults and HTTP latency"""

from decimal import Decimal

from prometheus_client import Counter, Histogram

# Ledger write metrics
ledger_mutation_counter = Counter(
    "credit_ledger_mutations_total",
    "Ledger writes by entity and action",
    ["entity", "action"],  # customer|loan|repayment, create|update|delete
)

loaned_amount_counter = Counter(
    "credit_ledger_loaned_amount_total",
    "Sum of loan principals recorded",
)

repaid_amount_counter = Counter(
    "credit_ledger_repaid_amount_total",
    "Sum of repayment amounts recorded",
)

# Data integrity
tenant_violation_counter = Counter(
    "credit_ledger_tenant_violations_total",
    "Loans excluded because their customer belongs to another shopkeeper",
)

repository_failure_counter = Counter(
    "credit_ledger_repository_failures_total",
    "Storage errors or inconsistent repository results",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_mutation(entity: str, action: str) -> None:
    ledger_mutation_counter.labels(entity=entity, action=action).inc()


def record_loan(loan_amount: Decimal) -> None:
    """Record a new credit sale"""
    record_mutation("loan", "create")
    loaned_amount_counter.inc(float(loan_amount))


def record_repayment(amount: Decimal) -> None:
    """Record money received against a loan"""
    record_mutation("repayment", "create")
    repaid_amount_counter.inc(float(amount))
