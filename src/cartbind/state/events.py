"""Intent and output message types.

Intents flow from the view binder into the state store; outputs flow back.
Both are immutable and carry a ``kind`` tag so they can be validated from
plain dicts (e.g. a recorded session) via :func:`parse_intent`.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator

from cartbind.models.product import Product


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------


class ViewDidLoad(_Message):
    """The screen appeared; load the catalog."""

    kind: Literal["view_did_load"] = "view_did_load"


class ResetRequested(_Message):
    """Clear cart and likes."""

    kind: Literal["reset_requested"] = "reset_requested"


class QuantityChanged(_Message):
    """A row's quantity control changed.

    No bounds are enforced here; the interaction source validates values.
    """

    kind: Literal["quantity_changed"] = "quantity_changed"
    product: Product
    quantity: int


class LikeToggled(_Message):
    """A row's like control was activated."""

    kind: Literal["like_toggled"] = "like_toggled"
    product: Product


Intent = Annotated[
    ViewDidLoad | ResetRequested | QuantityChanged | LikeToggled,
    Field(discriminator="kind"),
]

_INTENT_ADAPTER: TypeAdapter[Intent] = TypeAdapter(Intent)


def parse_intent(data: object) -> Intent:
    """Validate a dict (or intent instance) into a typed intent."""
    return _INTENT_ADAPTER.validate_python(data)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class ProductsLoaded(_Message):
    """The catalog finished loading; replaces the bound product sequence."""

    kind: Literal["products_loaded"] = "products_loaded"
    products: tuple[Product, ...] = ()


class ViewStateSnapshot(_Message):
    """Derived aggregates at one point in time.

    This is the only data the binder may apply to the rendering sink besides
    the product sequence itself.  ``quantity_by_id`` is a read-only view, so a
    snapshot cannot change after it has been emitted.
    """

    kind: Literal["view_state"] = "view_state"
    item_count: int = 0
    total_cost: int = 0
    liked_ids: frozenset[int] = Field(default_factory=frozenset)
    quantity_by_id: Mapping[int, int] = Field(default_factory=dict, validate_default=True)

    @field_validator("quantity_by_id")
    @classmethod
    def _freeze_quantities(cls, value: Mapping[int, int]) -> Mapping[int, int]:
        # Validation already built a fresh dict; only the view is needed.
        return MappingProxyType(dict(value) if not isinstance(value, dict) else value)

    @field_serializer("quantity_by_id")
    def _dump_quantities(self, value: Mapping[int, int]) -> dict[int, int]:
        return dict(value)

    def quantity_for(self, product_id: int) -> int:
        """Quantity for *product_id*; absent ids count as zero."""
        return self.quantity_by_id.get(product_id, 0)

    def is_liked(self, product_id: int) -> bool:
        return product_id in self.liked_ids


Output = Annotated[ProductsLoaded | ViewStateSnapshot, Field(discriminator="kind")]
