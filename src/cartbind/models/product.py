"""Product model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A purchasable product supplied by the catalog.

    Products are immutable and keyed by ``id``; every piece of cart and
    like state refers to a product by its id only.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: int
    """Unique product key."""
    name: str
    """Display name."""
    price: int = Field(..., ge=0)
    """Unit price in whole currency units."""
