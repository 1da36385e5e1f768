"""Internal constants shared across the library."""

#: Simulated catalog load latency applied to ``ViewDidLoad`` (seconds).
DEFAULT_LOAD_DELAY_SECONDS: float = 0.5

HEADER_TEMPLATE = "Number of items: {item_count}"
FOOTER_TEMPLATE = "Total cost: ${total_cost}"

#: Placeholder each text template must contain.
HEADER_PLACEHOLDER = "{item_count}"
FOOTER_PLACEHOLDER = "{total_cost}"
