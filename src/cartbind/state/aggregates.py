"""Derived aggregates.

Pure functions over cart/like state. Nothing here is cached: every snapshot
is recomputed from the maps it is given.
"""

from __future__ import annotations

from collections.abc import Mapping

from cartbind.state.events import ViewStateSnapshot


def item_count(cart: Mapping[int, int]) -> int:
    return sum(cart.values())


def total_cost(cart: Mapping[int, int], prices: Mapping[int, int]) -> int:
    """Sum of ``quantity * price`` over the cart.

    Ids without a known price contribute nothing.
    """
    return sum(quantity * prices.get(product_id, 0) for product_id, quantity in cart.items())


def liked_ids(likes: Mapping[int, bool]) -> frozenset[int]:
    return frozenset(product_id for product_id, liked in likes.items() if liked)


def build_snapshot(
    cart: Mapping[int, int],
    likes: Mapping[int, bool],
    prices: Mapping[int, int],
) -> ViewStateSnapshot:
    """Compute a :class:`ViewStateSnapshot` from the current state."""
    return ViewStateSnapshot(
        item_count=item_count(cart),
        total_cost=total_cost(cart, prices),
        liked_ids=liked_ids(likes),
        quantity_by_id=dict(cart),
    )


def toggled(likes: Mapping[int, bool], product_id: int) -> bool:
    """Next liked value for *product_id*: absent becomes ``True``, else flips."""
    current = likes.get(product_id)
    if current is None:
        return True
    return not current
