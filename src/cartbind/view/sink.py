"""Rendering sink protocol and an in-memory recording sink."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from cartbind.models.product import Product


class RenderingSink(Protocol):
    """Passive list display driven by :class:`cartbind.view.binder.ViewBinder`.

    The binder only ever writes to a sink; it never reads displayed values
    back.
    """

    def set_row_count(self, count: int) -> None: ...

    def bind_row(self, index: int, product: Product, quantity: int, liked: bool) -> None: ...

    def reload_all(self) -> None: ...

    def set_header_text(self, text: str) -> None: ...

    def set_footer_text(self, text: str) -> None: ...


@dataclass(frozen=True)
class BoundRow:
    """What one row was last told to display."""

    product: Product
    quantity: int
    liked: bool


@dataclass
class RecordingSink:
    """Sink that keeps the last rendered frame in memory.

    Useful for headless runs and tests; ``reloads`` counts completed renders.
    """

    row_count: int = 0
    rows: dict[int, BoundRow] = field(default_factory=dict)
    header_text: str = ""
    footer_text: str = ""
    reloads: int = 0

    def set_row_count(self, count: int) -> None:
        self.row_count = count
        self.rows = {i: row for i, row in self.rows.items() if i < count}

    def bind_row(self, index: int, product: Product, quantity: int, liked: bool) -> None:
        self.rows[index] = BoundRow(product=product, quantity=quantity, liked=liked)

    def reload_all(self) -> None:
        self.reloads += 1

    def set_header_text(self, text: str) -> None:
        self.header_text = text

    def set_footer_text(self, text: str) -> None:
        self.footer_text = text

    def visible_rows(self) -> list[BoundRow]:
        return [self.rows[i] for i in range(self.row_count) if i in self.rows]
