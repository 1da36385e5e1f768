"""Custom exception hierarchy for cartbind."""

from __future__ import annotations


class CartBindError(Exception):
    """Base exception for all cartbind errors."""


class CartBindConfigError(CartBindError):
    """Invalid or missing configuration."""


class ChannelClosedError(CartBindError):
    """An intent was sent after the intent channel was closed."""


class BinderNotStartedError(CartBindError):
    """The view binder was used before its intent channel was started.

    Use ``async with ViewBinder(...) as binder:`` (or call
    :meth:`ViewBinder.start`) before forwarding lifecycle or row events.
    """
