"""/v1/customers - customer management for the calling shopkeeper"""

from typing import List

from fastapi import APIRouter, Depends, Request

from credit_ledger.api.dependencies import get_ledger_service, get_request_id
from credit_ledger.api.v1.schemas import CustomerRequest, CustomerResponse
from credit_ledger.domain.service import LedgerService
from credit_ledger.infrastructure.observability.logging import log_mutation
from credit_ledger.infrastructure.observability.metrics import record_mutation

router = APIRouter()


@router.post("/customers", response_model=CustomerResponse, status_code=201)
def create_customer(
    request_body: CustomerRequest,
    request: Request,
    service: LedgerService = Depends(get_ledger_service),
):
    customer = service.create_customer(request_body.to_fields())

    record_mutation("customer", "create")
    log_mutation(get_request_id(request), service.shopkeeper_id, "customer", "create", customer.id)
    return CustomerResponse.from_domain(customer)


@router.get("/customers", response_model=List[CustomerResponse])
def list_customers(service: LedgerService = Depends(get_ledger_service)):
    return [CustomerResponse.from_domain(c) for c in service.list_customers()]


@router.get("/customers/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, service: LedgerService = Depends(get_ledger_service)):
    return CustomerResponse.from_domain(service.get_customer(customer_id))


@router.put("/customers/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    request_body: CustomerRequest,
    request: Request,
    service: LedgerService = Depends(get_ledger_service),
):
    """Replace all writable fields of a customer"""
    customer = service.update_customer(customer_id, request_body.to_fields())

    record_mutation("customer", "update")
    log_mutation(get_request_id(request), service.shopkeeper_id, "customer", "update", customer_id)
    return CustomerResponse.from_domain(customer)


@router.delete("/customers/{customer_id}")
def delete_customer(
    customer_id: int,
    request: Request,
    service: LedgerService = Depends(get_ledger_service),
):
    """
    Delete a customer.

    Their loans are kept (without a customer link) and still count toward
    the shopkeeper's summary and overdue list.
    """
    service.delete_customer(customer_id)

    record_mutation("customer", "delete")
    log_mutation(get_request_id(request), service.shopkeeper_id, "customer", "delete", customer_id)
    return {"message": "Customer deleted successfully"}
