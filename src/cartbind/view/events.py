"""Per-row interaction events, as emitted by a row before it is bound to a product."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class QuantityDidChange(BaseModel):
    """The row's quantity control moved to ``value``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["quantity_did_change"] = "quantity_did_change"
    value: int


class HeartDidTap(BaseModel):
    """The row's like control was tapped."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["heart_did_tap"] = "heart_did_tap"


RowEvent = QuantityDidChange | HeartDidTap
