"""Cart/like state store.

This is the only component allowed to mutate cart and like state, and the
only producer of output events.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from cartbind._constants import DEFAULT_LOAD_DELAY_SECONDS
from cartbind.catalog import Catalog
from cartbind.config import CartBindConfig
from cartbind.models.product import Product
from cartbind.state.aggregates import build_snapshot, toggled
from cartbind.state.events import (
    Intent,
    LikeToggled,
    Output,
    ProductsLoaded,
    QuantityChanged,
    ResetRequested,
    ViewDidLoad,
    ViewStateSnapshot,
)
from cartbind.state.trace import StateTrace, cart_trace, likes_trace

_logger = logging.getLogger(__name__)


class StateStore:
    """In-memory store for cart quantities and liked flags.

    The store is deterministic: given the same catalog and the same sequence
    of intents it produces the same outputs.  Every intent yields exactly one
    :class:`ViewStateSnapshot`; ``ViewDidLoad`` additionally emits
    :class:`ProductsLoaded` first, after the configured load delay.

    The store is not re-entrant.  Callers must hand it one intent at a time,
    which :class:`cartbind.channel.IntentChannel` guarantees.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        on_output: Callable[[Output], None] | None = None,
        load_delay: float = DEFAULT_LOAD_DELAY_SECONDS,
        on_trace: Callable[[StateTrace], None] | None = None,
        trace_enabled: bool = True,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._catalog = catalog
        self._on_output = on_output
        self._load_delay = load_delay
        self._on_trace = on_trace
        self._trace_enabled = trace_enabled
        self._sleep = sleep
        self._cart: dict[int, int] = {}
        self._likes: dict[int, bool] = {}
        # Filled from the catalog on each load; until then every product is unknown.
        self._prices: dict[int, int] = {}
        self._names: dict[int, str] = {}

    @classmethod
    def from_config(cls, catalog: Catalog, config: CartBindConfig, **kwargs: Any) -> StateStore:
        return cls(
            catalog,
            load_delay=config.load_delay_seconds,
            trace_enabled=config.trace_enabled,
            **kwargs,
        )

    def _index(self, products: Iterable[Product]) -> None:
        items = tuple(products)
        self._prices = {p.id: p.price for p in items}
        self._names = {p.id: p.name for p in items}

    # ------------------------------------------------------------------
    # Intent handling
    # ------------------------------------------------------------------

    async def handle(self, intent: Intent) -> None:
        """Apply one intent and emit its outputs.

        ``ViewDidLoad`` suspends for the load delay before emitting; every
        other intent is applied synchronously via :meth:`reduce`.
        """
        if isinstance(intent, ViewDidLoad):
            await self._load()
            return
        self.reduce(intent)

    async def _load(self) -> None:
        if self._load_delay > 0:
            await self._sleep(self._load_delay)
        products = tuple(self._catalog.products())
        self._index(products)
        _logger.debug("Catalog loaded products=%d", len(products))
        self._emit(ProductsLoaded(products=products))
        self._emit(self.snapshot())

    def reduce(self, intent: Intent) -> ViewStateSnapshot:
        """Apply a non-load intent, emit the resulting snapshot and return it."""
        if isinstance(intent, ViewDidLoad):
            raise TypeError("ViewDidLoad is handled asynchronously; use handle()")

        if isinstance(intent, ResetRequested):
            self._cart.clear()
            self._likes.clear()
            _logger.debug("Cart and likes reset")
            self._trace(cart_trace(self._cart, self._names))
            self._trace(likes_trace(self._likes, self._names))
        elif isinstance(intent, QuantityChanged):
            self._set_quantity(intent.product, intent.quantity)
        elif isinstance(intent, LikeToggled):
            self._toggle_like(intent.product)
        else:  # pragma: no cover
            raise TypeError(f"unsupported intent: {intent!r}")

        snapshot = self.snapshot()
        self._emit(snapshot)
        return snapshot

    def _set_quantity(self, product: Product, quantity: int) -> None:
        if product.id not in self._prices:
            _logger.debug("Ignoring quantity change for unknown product id=%s", product.id)
            return
        self._cart[product.id] = quantity
        self._trace(cart_trace(self._cart, self._names))

    def _toggle_like(self, product: Product) -> None:
        if product.id not in self._prices:
            _logger.debug("Ignoring like toggle for unknown product id=%s", product.id)
            return
        self._likes[product.id] = toggled(self._likes, product.id)
        self._trace(likes_trace(self._likes, self._names))

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def snapshot(self) -> ViewStateSnapshot:
        """Current derived aggregates, recomputed on every call."""
        return build_snapshot(self._cart, self._likes, self._prices)

    def quantity(self, product_id: int) -> int:
        return self._cart.get(product_id, 0)

    def is_liked(self, product_id: int) -> bool:
        return self._likes.get(product_id, False)

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit(self, output: Output) -> None:
        if self._on_output is not None:
            self._on_output(output)

    def _trace(self, record: StateTrace) -> None:
        if not self._trace_enabled:
            return
        _logger.debug("State changed section=%s\n%s", record.section, record.render())
        if self._on_trace is None:
            return
        try:
            self._on_trace(record)
        except Exception:
            _logger.debug("on_trace callback failed", exc_info=True)
