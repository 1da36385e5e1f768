"""Diagnostic trace records for cart/like mutations.

Trace records are observational only: the store emits one after each
mutation and nothing downstream may depend on them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum


class TraceSection(StrEnum):
    CART = "cart"
    LIKES = "likes"


@dataclass(frozen=True)
class StateTrace:
    """Entries of one state map right after it changed."""

    section: TraceSection
    entries: tuple[str, ...]

    def render(self) -> str:
        if self.section == TraceSection.LIKES:
            return f"liked: [{', '.join(self.entries)}]"
        return "\n".join((*self.entries, "======="))


def _name(names: Mapping[int, str], product_id: int) -> str:
    return names.get(product_id, f"#{product_id}")


def cart_trace(cart: Mapping[int, int], names: Mapping[int, str]) -> StateTrace:
    entries = tuple(f"{_name(names, pid)} - {quantity}" for pid, quantity in cart.items())
    return StateTrace(section=TraceSection.CART, entries=entries)


def likes_trace(likes: Mapping[int, bool], names: Mapping[int, str]) -> StateTrace:
    entries = tuple(_name(names, pid) for pid, liked in likes.items() if liked)
    return StateTrace(section=TraceSection.LIKES, entries=entries)
