"""
Rental endpoints for API v1.

These routes are not authenticated.  ``POST`` runs the rental
transaction: it answers 400 for an unknown customer or movie and for a
movie that is out of stock, and 500 with a generic message when the
store could not commit.
"""

from typing import List

from fastapi import APIRouter

from vidly_api.app.api.deps import http_error, path_id
from vidly_api.app.core.exceptions import StoreError
from vidly_api.app.schemas.rental import RentalCreate, RentalRead
from vidly_api.app.services.rental_service import RentalService

router = APIRouter()


@router.get("", response_model=List[RentalRead])
async def list_rentals() -> List[RentalRead]:
    """List all rentals, most recent first."""
    return await RentalService.list_rentals()


@router.post("", response_model=RentalRead)
async def create_rental(rental: RentalCreate) -> RentalRead:
    """Rent a movie and take one copy out of stock.

    The rental and the stock decrement are committed together; if the
    request fails, neither is stored and the whole call can be retried.
    """
    try:
        return await RentalService.create_rental(rental)
    except StoreError as e:
        raise http_error(e) from e


@router.put("/{rental_id}", response_model=RentalRead)
async def update_rental(rental_id: str, rental: RentalCreate) -> RentalRead:
    """Rewrite a rental's snapshots and dates.  Stock is not adjusted."""
    try:
        return await RentalService.update_rental(path_id(rental_id, "rental"), rental)
    except StoreError as e:
        raise http_error(e) from e


@router.delete("/{rental_id}", response_model=RentalRead)
async def delete_rental(rental_id: str) -> RentalRead:
    try:
        return await RentalService.delete_rental(path_id(rental_id, "rental"))
    except StoreError as e:
        raise http_error(e) from e


@router.get("/{rental_id}", response_model=RentalRead)
async def get_rental(rental_id: str) -> RentalRead:
    try:
        return await RentalService.get_rental(path_id(rental_id, "rental"))
    except StoreError as e:
        raise http_error(e) from e
