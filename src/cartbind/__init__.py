"""cartbind - unidirectional cart/like state binding for a product list screen."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cartbind")
except PackageNotFoundError:
    __version__ = "0+local"
from cartbind.catalog import Catalog, StaticCatalog, demo_catalog
from cartbind.channel import IntentChannel
from cartbind.config import CartBindConfig
from cartbind.exceptions import (
    BinderNotStartedError,
    CartBindConfigError,
    CartBindError,
    ChannelClosedError,
)
from cartbind.models import Product
from cartbind.state.events import (
    Intent,
    LikeToggled,
    Output,
    ProductsLoaded,
    QuantityChanged,
    ResetRequested,
    ViewDidLoad,
    ViewStateSnapshot,
    parse_intent,
)
from cartbind.state.store import StateStore
from cartbind.state.trace import StateTrace, TraceSection
from cartbind.view.binder import ViewBinder
from cartbind.view.events import HeartDidTap, QuantityDidChange, RowEvent
from cartbind.view.sink import BoundRow, RecordingSink, RenderingSink

__all__ = [
    "__version__",
    "BinderNotStartedError",
    "BoundRow",
    "CartBindConfig",
    "CartBindConfigError",
    "CartBindError",
    "Catalog",
    "ChannelClosedError",
    "HeartDidTap",
    "Intent",
    "IntentChannel",
    "LikeToggled",
    "Output",
    "Product",
    "ProductsLoaded",
    "QuantityChanged",
    "QuantityDidChange",
    "RecordingSink",
    "RenderingSink",
    "ResetRequested",
    "RowEvent",
    "StateStore",
    "StateTrace",
    "StaticCatalog",
    "TraceSection",
    "ViewBinder",
    "ViewDidLoad",
    "ViewStateSnapshot",
    "demo_catalog",
    "parse_intent",
]
