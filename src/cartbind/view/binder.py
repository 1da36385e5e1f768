"""View binder: the seam between the rendering sink and the state store.

Row and lifecycle events go in as intents; store outputs come back and are
applied to the sink.  The binder never reads displayed values from the sink.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from cartbind.catalog import Catalog, demo_catalog
from cartbind.channel import IntentChannel
from cartbind.config import CartBindConfig
from cartbind.exceptions import BinderNotStartedError
from cartbind.models.product import Product
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
from cartbind.state.store import StateStore
from cartbind.state.trace import StateTrace
from cartbind.view.events import HeartDidTap, QuantityDidChange, RowEvent
from cartbind.view.sink import RenderingSink

_logger = logging.getLogger(__name__)


class ViewBinder:
    """Binds a product list screen to its own :class:`StateStore`.

    Usage::

        async with ViewBinder(sink) as binder:
            binder.view_did_appear()
            ...
            binder.row_event(0, QuantityDidChange(value=2))
            await binder.drain()

    Parameters
    ----------
    sink
        The passive list display.
    catalog
        Product source.  Defaults to the built-in demo collection.
    config
        Screen configuration.  Defaults to :class:`CartBindConfig`.
    dispatch
        Schedules a render callable on the UI thread.  When omitted,
        outputs are applied inline on the loop thread.  Interaction
        methods may be called from any thread; intents sent off the loop
        thread are handed to it thread-safely.
    on_trace
        Optional observer for state-change trace records.
    sleep
        Awaitable used for the load delay (tests substitute their own).
    """

    def __init__(
        self,
        sink: RenderingSink,
        *,
        catalog: Catalog | None = None,
        config: CartBindConfig | None = None,
        dispatch: Callable[[Callable[[], None]], None] | None = None,
        on_trace: Callable[[StateTrace], None] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._sink = sink
        self._config = config or CartBindConfig()
        self._dispatch = dispatch
        self._store = StateStore.from_config(
            catalog if catalog is not None else demo_catalog(),
            self._config,
            on_output=self._on_output,
            on_trace=on_trace,
            sleep=sleep,
        )
        self._channel = IntentChannel(self._store.handle, logger=_logger)
        self._products: tuple[Product, ...] = ()
        self._snapshot = ViewStateSnapshot()
        self._bindings: dict[int, Product] = {}
        self._load_sent = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ViewBinder:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    def start(self) -> None:
        self._channel.start()

    async def drain(self) -> None:
        """Wait until every intent sent so far has been handled."""
        await self._channel.drain()

    async def aclose(self) -> None:
        await self._channel.aclose()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def snapshot(self) -> ViewStateSnapshot:
        return self._snapshot

    @property
    def header_text(self) -> str:
        return self._config.header_text(self._snapshot.item_count)

    @property
    def footer_text(self) -> str:
        return self._config.footer_text(self._snapshot.total_cost)

    def bound_product(self, row_index: int) -> Product | None:
        """Product the row at *row_index* was bound to at the last render."""
        return self._bindings.get(row_index)

    # ------------------------------------------------------------------
    # Interaction → intents
    # ------------------------------------------------------------------

    def _send(self, intent: Intent) -> None:
        if not self._channel.is_running:
            raise BinderNotStartedError("Binder not started. Use 'async with ViewBinder(...) as binder:'")
        self._channel.submit(intent)

    def view_did_appear(self) -> None:
        """Request the initial load.  Only the first call has an effect."""
        if self._load_sent:
            _logger.debug("Ignoring repeated view_did_appear")
            return
        self._send(ViewDidLoad())
        self._load_sent = True

    def reset_tapped(self) -> None:
        self._send(ResetRequested())

    def row_event(self, row_index: int, event: RowEvent) -> None:
        """Translate an event from the row at *row_index* into an intent.

        The product is the one bound to that row at the last render.  Events
        from rows that were never bound are dropped.
        """
        product = self._bindings.get(row_index)
        if product is None:
            _logger.debug("Ignoring %s from unbound row=%s", event.kind, row_index)
            return
        if isinstance(event, QuantityDidChange):
            self._send(QuantityChanged(product=product, quantity=event.value))
        elif isinstance(event, HeartDidTap):
            self._send(LikeToggled(product=product))

    # ------------------------------------------------------------------
    # Outputs → sink
    # ------------------------------------------------------------------

    def _on_output(self, output: Output) -> None:
        if self._dispatch is None:
            self.apply(output)
            return
        self._dispatch(lambda: self.apply(output))

    def apply(self, output: Output) -> None:
        """Apply one store output.  Must run on the UI thread."""
        if isinstance(output, ProductsLoaded):
            self._products = output.products
            _logger.debug("Bound products=%d", len(self._products))
        elif isinstance(output, ViewStateSnapshot):
            self._snapshot = output
            self.render()

    def render(self) -> None:
        """Rebuild every row from the current products and aggregates."""
        snapshot = self._snapshot
        sink = self._sink
        self._bindings = dict(enumerate(self._products))
        sink.set_row_count(len(self._products))
        for index, product in self._bindings.items():
            sink.bind_row(
                index,
                product,
                snapshot.quantity_for(product.id),
                snapshot.is_liked(product.id),
            )
        sink.set_header_text(self.header_text)
        sink.set_footer_text(self.footer_text)
        sink.reload_all()
