"""
Pydantic models for genres.

``GenreBase`` holds the shared fields; ``GenreCreate`` is the request
body for create and update, and ``GenreRead`` adds the ``id`` for
responses.  ``GenreRead`` doubles as the genre snapshot embedded in a
movie.
"""

from pydantic import BaseModel, Field


class GenreBase(BaseModel):
    name: str = Field(..., min_length=5, max_length=50, description="Genre name, e.g. Comedy")


class GenreCreate(GenreBase):
    """Schema for creating or replacing a genre."""
    pass


class GenreRead(GenreBase):
    """Schema for reading a genre from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }
