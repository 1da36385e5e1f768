"""Typed value models."""

from cartbind.models.product import Product

__all__ = [
    "Product",
]
