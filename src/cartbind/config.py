"""Screen configuration for cartbind."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from cartbind._constants import (
    DEFAULT_LOAD_DELAY_SECONDS,
    FOOTER_PLACEHOLDER,
    FOOTER_TEMPLATE,
    HEADER_PLACEHOLDER,
    HEADER_TEMPLATE,
)
from cartbind.exceptions import CartBindConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class CartBindConfig:
    """Screen configuration.

    Parameters
    ----------
    load_delay_seconds : float
        Simulated catalog load latency applied when the screen appears.
        Must be ``>= 0``.  Defaults to half a second.
    header_template : str
        ``str.format`` template for the header text.  Must contain
        ``{item_count}``.
    footer_template : str
        ``str.format`` template for the footer text.  Must contain
        ``{total_cost}``.
    trace_enabled : bool
        Emit a diagnostic trace record on every cart/like mutation.
    """

    load_delay_seconds: float = DEFAULT_LOAD_DELAY_SECONDS
    header_template: str = HEADER_TEMPLATE
    footer_template: str = FOOTER_TEMPLATE
    trace_enabled: bool = True

    def __post_init__(self) -> None:
        if self.load_delay_seconds < 0:
            raise CartBindConfigError(f"load_delay_seconds must be >= 0, got {self.load_delay_seconds}")
        if HEADER_PLACEHOLDER not in self.header_template:
            raise CartBindConfigError(f"header_template must contain {HEADER_PLACEHOLDER}")
        if FOOTER_PLACEHOLDER not in self.footer_template:
            raise CartBindConfigError(f"footer_template must contain {FOOTER_PLACEHOLDER}")

    def header_text(self, item_count: int) -> str:
        return self.header_template.format(item_count=item_count)

    def footer_text(self, total_cost: int) -> str:
        return self.footer_template.format(total_cost=total_cost)

    @classmethod
    def from_env(cls, **overrides: Any) -> CartBindConfig:
        """Create configuration from environment variables.

        Reads ``CARTBIND_LOAD_DELAY``, ``CARTBIND_HEADER_TEMPLATE``,
        ``CARTBIND_FOOTER_TEMPLATE`` and ``CARTBIND_TRACE_ENABLED``.
        Explicit keyword arguments override environment values.

        Raises
        ------
        CartBindConfigError
            If a numeric variable cannot be parsed or a value is invalid.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        delay_env = env.get("CARTBIND_LOAD_DELAY")
        if delay_env is not None and "load_delay_seconds" not in overrides:
            try:
                config_kwargs["load_delay_seconds"] = float(delay_env)
            except ValueError as exc:
                raise CartBindConfigError(f"CARTBIND_LOAD_DELAY is not a number: {delay_env!r}") from exc

        _ENV_TEMPLATE_MAP = {
            "CARTBIND_HEADER_TEMPLATE": "header_template",
            "CARTBIND_FOOTER_TEMPLATE": "footer_template",
        }
        for env_key, field_name in _ENV_TEMPLATE_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "trace_enabled" not in overrides:
            config_kwargs["trace_enabled"] = _env_bool(env.get("CARTBIND_TRACE_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
