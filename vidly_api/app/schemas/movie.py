"""
Pydantic models for movies.

Requests reference the genre by ``genreId``; responses embed a
snapshot of the genre (``{id, name}``) taken when the movie was last
written.  ``numberInStock`` is the field rentals decrement.
"""

from pydantic import BaseModel, Field

from vidly_api.app.core.db import MAX_ROW_ID

from .genre import GenreRead


class MovieBase(BaseModel):
    title: str = Field(..., min_length=5, max_length=255)
    number_in_stock: int = Field(..., ge=0, le=255, alias="numberInStock")
    daily_rental_rate: float = Field(..., ge=0, le=255, allow_inf_nan=False, alias="dailyRentalRate")

    model_config = {
        "populate_by_name": True,
    }


class MovieCreate(MovieBase):
    """Schema for creating or replacing a movie."""

    genre_id: int = Field(..., gt=0, le=MAX_ROW_ID, alias="genreId")


class MovieRead(MovieBase):
    """Schema for reading a movie from the API."""

    id: int
    genre: GenreRead

    model_config = {
        "from_attributes": True,
    }
