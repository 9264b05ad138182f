"""
Customer endpoints for API v1.

Same access rules as genres: public reads, token for writes, admin for
deletes.
"""

from typing import List

from fastapi import APIRouter, Depends

from vidly_api.app.api.deps import http_error, path_id
from vidly_api.app.core.exceptions import StoreError
from vidly_api.app.core.security import get_current_user, require_admin
from vidly_api.app.schemas.customer import CustomerCreate, CustomerRead
from vidly_api.app.services.customer_service import CustomerService

router = APIRouter()


@router.get("", response_model=List[CustomerRead])
async def list_customers() -> List[CustomerRead]:
    return await CustomerService.list_customers()


@router.post("", response_model=CustomerRead)
async def create_customer(
    customer: CustomerCreate,
    current_user: dict = Depends(get_current_user),
) -> CustomerRead:
    return await CustomerService.create_customer(customer)


@router.put("/{customer_id}", response_model=CustomerRead)
async def update_customer(
    customer_id: str,
    customer: CustomerCreate,
    current_user: dict = Depends(get_current_user),
) -> CustomerRead:
    """Replace a customer.

    Existing rentals keep the customer details they were created with.
    """
    try:
        return await CustomerService.update_customer(path_id(customer_id, "customer"), customer)
    except StoreError as e:
        raise http_error(e) from e


@router.delete("/{customer_id}", response_model=CustomerRead)
async def delete_customer(
    customer_id: str,
    current_user: dict = Depends(require_admin),
) -> CustomerRead:
    try:
        return await CustomerService.delete_customer(path_id(customer_id, "customer"))
    except StoreError as e:
        raise http_error(e) from e


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(customer_id: str) -> CustomerRead:
    try:
        return await CustomerService.get_customer(path_id(customer_id, "customer"))
    except StoreError as e:
        raise http_error(e) from e
