"""Static product catalog."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from cartbind.models.product import Product


class Catalog(Protocol):
    """Source of the fixed, ordered product sequence shown on the screen."""

    def products(self) -> Sequence[Product]: ...


class StaticCatalog:
    """In-memory catalog over a fixed product sequence.

    Product ids must be unique; order is preserved as given.
    """

    def __init__(self, products: Iterable[Product | Mapping[str, Any]]) -> None:
        items = tuple(p if isinstance(p, Product) else Product.model_validate(p) for p in products)
        seen: set[int] = set()
        for product in items:
            if product.id in seen:
                raise ValueError(f"duplicate product id {product.id}")
            seen.add(product.id)
        self._products = items
        self._by_id = {p.id: p for p in items}

    def products(self) -> tuple[Product, ...]:
        return self._products

    def get(self, product_id: int) -> Product | None:
        return self._by_id.get(product_id)

    def __len__(self) -> int:
        return len(self._products)


_DEMO_PRODUCTS: tuple[dict[str, Any], ...] = (
    {"id": 1, "name": "Blue Denim Jacket", "price": 120},
    {"id": 2, "name": "Striped Cotton Tee", "price": 25},
    {"id": 3, "name": "Leather Chelsea Boots", "price": 180},
    {"id": 4, "name": "Wool Beanie", "price": 18},
    {"id": 5, "name": "Canvas Tote Bag", "price": 30},
    {"id": 6, "name": "Linen Shirt", "price": 55},
    {"id": 7, "name": "Running Sneakers", "price": 95},
    {"id": 8, "name": "Aviator Sunglasses", "price": 140},
)


def demo_catalog() -> StaticCatalog:
    """Return the built-in product collection used by the demo screen."""
    return StaticCatalog(_DEMO_PRODUCTS)
