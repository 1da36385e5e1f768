from __future__ import annotations

import asyncio
import queue
import threading
import time
from collections.abc import Callable

import pytest
from conftest import PRODUCT_A, PRODUCT_B, GatedSleep

from cartbind.catalog import StaticCatalog
from cartbind.config import CartBindConfig
from cartbind.exceptions import BinderNotStartedError
from cartbind.state.events import ProductsLoaded, ViewStateSnapshot
from cartbind.view.binder import ViewBinder
from cartbind.view.events import HeartDidTap, QuantityDidChange
from cartbind.view.sink import BoundRow, RecordingSink

_NO_DELAY = CartBindConfig(load_delay_seconds=0)


@pytest.mark.asyncio
async def test_initial_load_renders_all_rows_empty(catalog: StaticCatalog) -> None:
    sink = RecordingSink()

    async with ViewBinder(sink, catalog=catalog, config=_NO_DELAY) as binder:
        binder.view_did_appear()
        await binder.drain()

    assert sink.row_count == 2
    assert sink.visible_rows() == [
        BoundRow(product=PRODUCT_A, quantity=0, liked=False),
        BoundRow(product=PRODUCT_B, quantity=0, liked=False),
    ]
    assert sink.header_text == "Number of items: 0"
    assert sink.footer_text == "Total cost: $0"
    assert sink.reloads == 1


@pytest.mark.asyncio
async def test_row_events_update_rows_header_and_footer(catalog: StaticCatalog) -> None:
    sink = RecordingSink()

    async with ViewBinder(sink, catalog=catalog, config=_NO_DELAY) as binder:
        binder.view_did_appear()
        await binder.drain()

        binder.row_event(0, QuantityDidChange(value=2))
        binder.row_event(1, QuantityDidChange(value=3))
        binder.row_event(1, HeartDidTap())
        await binder.drain()

    assert sink.visible_rows() == [
        BoundRow(product=PRODUCT_A, quantity=2, liked=False),
        BoundRow(product=PRODUCT_B, quantity=3, liked=True),
    ]
    assert sink.header_text == "Number of items: 5"
    assert sink.footer_text == "Total cost: $35"
    assert sink.reloads == 4


@pytest.mark.asyncio
async def test_reset_tapped_clears_rendered_state(catalog: StaticCatalog) -> None:
    sink = RecordingSink()

    async with ViewBinder(sink, catalog=catalog, config=_NO_DELAY) as binder:
        binder.view_did_appear()
        await binder.drain()
        binder.row_event(0, QuantityDidChange(value=2))
        binder.row_event(0, HeartDidTap())
        binder.reset_tapped()
        await binder.drain()

    assert binder.snapshot == ViewStateSnapshot()
    assert sink.visible_rows()[0] == BoundRow(product=PRODUCT_A, quantity=0, liked=False)
    assert sink.header_text == "Number of items: 0"


@pytest.mark.asyncio
async def test_view_did_appear_only_loads_once(catalog: StaticCatalog) -> None:
    sink = RecordingSink()

    async with ViewBinder(sink, catalog=catalog, config=_NO_DELAY) as binder:
        binder.view_did_appear()
        binder.view_did_appear()
        await binder.drain()

    assert sink.reloads == 1


@pytest.mark.asyncio
async def test_row_events_before_first_render_are_ignored(catalog: StaticCatalog) -> None:
    sink = RecordingSink()
    gate = GatedSleep()

    async with ViewBinder(sink, catalog=catalog, config=CartBindConfig(load_delay_seconds=1.0), sleep=gate) as binder:
        binder.view_did_appear()
        binder.row_event(0, QuantityDidChange(value=4))
        gate.release.set()
        await binder.drain()

    assert binder.store.quantity(PRODUCT_A.id) == 0
    assert sink.reloads == 1


@pytest.mark.asyncio
async def test_render_before_products_loaded_shows_zero_rows(catalog: StaticCatalog) -> None:
    sink = RecordingSink()

    async with ViewBinder(sink, catalog=catalog, config=_NO_DELAY) as binder:
        binder.reset_tapped()
        await binder.drain()

    assert sink.row_count == 0
    assert sink.visible_rows() == []
    assert sink.header_text == "Number of items: 0"
    assert sink.footer_text == "Total cost: $0"
    assert sink.reloads == 1


def test_products_loaded_does_not_render_by_itself(catalog: StaticCatalog) -> None:
    sink = RecordingSink()
    binder = ViewBinder(sink, catalog=catalog, config=_NO_DELAY)

    binder.apply(ProductsLoaded(products=(PRODUCT_A, PRODUCT_B)))

    assert binder.products == (PRODUCT_A, PRODUCT_B)
    assert sink.reloads == 0
    assert binder.bound_product(0) is None

    binder.apply(ViewStateSnapshot(item_count=1, total_cost=5, quantity_by_id={2: 1}))

    assert sink.reloads == 1
    assert binder.bound_product(1) == PRODUCT_B
    assert sink.rows[1] == BoundRow(product=PRODUCT_B, quantity=1, liked=False)


def test_binding_table_is_rebuilt_on_each_render(catalog: StaticCatalog) -> None:
    sink = RecordingSink()
    binder = ViewBinder(sink, catalog=catalog, config=_NO_DELAY)

    binder.apply(ProductsLoaded(products=(PRODUCT_A, PRODUCT_B)))
    binder.apply(ViewStateSnapshot())
    assert binder.bound_product(0) == PRODUCT_A

    binder.apply(ProductsLoaded(products=(PRODUCT_B,)))
    binder.apply(ViewStateSnapshot())

    assert binder.bound_product(0) == PRODUCT_B
    assert binder.bound_product(1) is None
    assert sink.row_count == 1


def test_sending_before_start_raises(catalog: StaticCatalog) -> None:
    binder = ViewBinder(RecordingSink(), catalog=catalog, config=_NO_DELAY)

    with pytest.raises(BinderNotStartedError):
        binder.view_did_appear()


@pytest.mark.asyncio
async def test_dispatch_defers_rendering_to_ui_thread(catalog: StaticCatalog) -> None:
    sink = RecordingSink()
    scheduled: list[Callable[[], None]] = []

    async with ViewBinder(sink, catalog=catalog, config=_NO_DELAY, dispatch=scheduled.append) as binder:
        binder.view_did_appear()
        await binder.drain()

    assert len(scheduled) == 2
    assert sink.reloads == 0

    for job in scheduled:
        job()

    assert sink.row_count == 2
    assert sink.reloads == 1


@pytest.mark.asyncio
async def test_custom_header_and_footer_templates(catalog: StaticCatalog) -> None:
    sink = RecordingSink()
    config = CartBindConfig(
        load_delay_seconds=0,
        header_template="{item_count} items",
        footer_template="EUR {total_cost}",
    )

    async with ViewBinder(sink, catalog=catalog, config=config) as binder:
        binder.view_did_appear()
        await binder.drain()
        binder.row_event(1, QuantityDidChange(value=2))
        await binder.drain()

    assert sink.header_text == "2 items"
    assert sink.footer_text == "EUR 10"


def test_events_from_ui_thread_reach_loop_running_elsewhere(catalog: StaticCatalog) -> None:
    sink = RecordingSink()
    ui_jobs: queue.Queue[Callable[[], None]] = queue.Queue()
    loop = asyncio.new_event_loop()
    loop_thread = threading.Thread(target=loop.run_forever, daemon=True)
    loop_thread.start()
    binder = ViewBinder(sink, catalog=catalog, config=_NO_DELAY, dispatch=ui_jobs.put)
    try:
        asyncio.run_coroutine_threadsafe(binder.__aenter__(), loop).result(timeout=1.0)
        # Let the loop go idle so only a thread-safe hand-off can wake it.
        time.sleep(0.2)

        binder.view_did_appear()
        for _ in range(2):
            ui_jobs.get(timeout=1.0)()

        assert sink.row_count == 2
        assert sink.reloads == 1

        time.sleep(0.1)
        binder.row_event(0, QuantityDidChange(value=2))
        ui_jobs.get(timeout=1.0)()

        assert sink.header_text == "Number of items: 2"
        assert sink.footer_text == "Total cost: $20"
    finally:
        asyncio.run_coroutine_threadsafe(binder.aclose(), loop).result(timeout=1.0)
        loop.call_soon_threadsafe(loop.stop)
        loop_thread.join(timeout=1.0)
        loop.close()


def test_snapshot_held_by_caller_cannot_change_rendering(catalog: StaticCatalog) -> None:
    sink = RecordingSink()
    binder = ViewBinder(sink, catalog=catalog, config=_NO_DELAY)
    binder.apply(ProductsLoaded(products=(PRODUCT_A, PRODUCT_B)))
    binder.apply(ViewStateSnapshot(item_count=1, total_cost=10, quantity_by_id={1: 1}))

    with pytest.raises(TypeError):
        binder.snapshot.quantity_by_id[1] = 99  # type: ignore[index]
    binder.render()

    assert sink.rows[0].quantity == 1
    assert sink.header_text == "Number of items: 1"
