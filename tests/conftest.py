from __future__ import annotations

import asyncio

import pytest

from cartbind.catalog import StaticCatalog
from cartbind.models.product import Product

PRODUCT_A = Product(id=1, name="A", price=10)
PRODUCT_B = Product(id=2, name="B", price=5)


class GatedSleep:
    """Stand-in for ``asyncio.sleep`` that blocks until released."""

    def __init__(self) -> None:
        self.calls: list[float] = []
        self.release = asyncio.Event()

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)
        await self.release.wait()


@pytest.fixture
def catalog() -> StaticCatalog:
    return StaticCatalog([PRODUCT_A, PRODUCT_B])
