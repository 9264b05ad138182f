"""
Pydantic models for customers.
"""

from pydantic import BaseModel, Field


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=5, max_length=50)
    phone: str = Field(..., min_length=5, max_length=50)
    is_gold: bool = Field(False, alias="isGold", description="Gold members get a discounted rate")

    model_config = {
        "populate_by_name": True,
    }


class CustomerCreate(CustomerBase):
    """Schema for creating or replacing a customer."""
    pass


class CustomerRead(CustomerBase):
    """Schema for reading a customer from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }
