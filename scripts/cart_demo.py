#!/usr/bin/env python3
"""Scripted product-list session rendered as text.

Drives a :class:`cartbind.ViewBinder` through a short session against a
console sink and prints every frame the screen would display.

Default session:
1) screen appears (catalog loads after the configured delay),
2) quantities change on a few rows,
3) a row is liked twice and another once,
4) reset is tapped (optional, ``--no-reset`` to skip).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from cartbind import (  # noqa: E402
    CartBindConfig,
    HeartDidTap,
    Product,
    QuantityDidChange,
    StateTrace,
    ViewBinder,
)


class ConsoleSink:
    """Collects one frame of rows and prints it on ``reload_all``."""

    def __init__(self, *, show_empty: bool = True) -> None:
        self._show_empty = show_empty
        self._rows: dict[int, str] = {}
        self._count = 0
        self._header = ""
        self._footer = ""
        self._frame = 0

    def set_row_count(self, count: int) -> None:
        self._count = count
        self._rows = {}

    def bind_row(self, index: int, product: Product, quantity: int, liked: bool) -> None:
        if not self._show_empty and quantity == 0 and not liked:
            return
        heart = "<3" if liked else "  "
        self._rows[index] = f"  {heart} {product.name:<24} ${product.price:>4}  x{quantity}"

    def reload_all(self) -> None:
        self._frame += 1
        print(f"--- frame {self._frame} ({self._count} rows) ---")
        print(f"  {self._header}")
        for index in sorted(self._rows):
            print(self._rows[index])
        print(f"  {self._footer}")

    def set_header_text(self, text: str) -> None:
        self._header = text

    def set_footer_text(self, text: str) -> None:
        self._footer = text


def _print_trace(record: StateTrace) -> None:
    print(f"[trace {record.section}] {record.render()}")


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, object] = {}
    if args.delay is not None:
        overrides["load_delay_seconds"] = args.delay
    config = CartBindConfig.from_env(**overrides)
    sink = ConsoleSink(show_empty=not args.compact)

    async with ViewBinder(sink, config=config, on_trace=_print_trace if args.trace else None) as binder:
        binder.view_did_appear()
        # Rows are bound only after the first render, so wait for the load.
        await binder.drain()

        binder.row_event(0, QuantityDidChange(value=2))
        binder.row_event(1, QuantityDidChange(value=3))
        binder.row_event(3, QuantityDidChange(value=1))
        binder.row_event(1, HeartDidTap())
        binder.row_event(2, HeartDidTap())
        binder.row_event(2, HeartDidTap())
        await binder.drain()

        if not args.no_reset:
            binder.reset_tapped()
            await binder.drain()

    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--delay", type=float, default=None, help="Catalog load delay in seconds")
    parser.add_argument("--compact", action="store_true", help="Only print rows with a quantity or a like")
    parser.add_argument("--no-reset", action="store_true", help="Skip the final reset")
    parser.add_argument("--trace", action="store_true", help="Print state-change trace records")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
