"""
Pydantic models for rentals.

A rental embeds snapshots of the customer and the movie as they were
when the rental was written.  The snapshots are frozen models: they are
values copied into the rental, not references, so later edits to the
customer or movie never change an existing rental.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from vidly_api.app.core.db import MAX_ROW_ID


class RentalCreate(BaseModel):
    """Request body for creating or replacing a rental."""

    customer_id: int = Field(..., gt=0, le=MAX_ROW_ID, alias="customerId")
    movie_id: int = Field(..., gt=0, le=MAX_ROW_ID, alias="movieId")
    date_out: datetime = Field(..., alias="dateOut")
    date_returned: Optional[datetime] = Field(None, alias="dateReturned")
    rental_fee: Optional[float] = Field(None, ge=0, allow_inf_nan=False, alias="rentalFee")

    model_config = {
        "populate_by_name": True,
    }


class CustomerSnapshot(BaseModel):
    id: int
    name: str

    model_config = {
        "frozen": True,
    }


class MovieSnapshot(BaseModel):
    id: int
    title: str
    daily_rental_rate: float = Field(..., alias="dailyRentalRate")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }


class RentalRead(BaseModel):
    """Schema for reading a rental from the API."""

    id: int
    customer: CustomerSnapshot
    movie: MovieSnapshot
    date_out: datetime = Field(..., alias="dateOut")
    date_returned: Optional[datetime] = Field(None, alias="dateReturned")
    rental_fee: Optional[float] = Field(None, alias="rentalFee")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }
