"""Per-user and per-run state for Locust load test scenarios."""

from dataclasses import dataclass, field


@dataclass
class ConsumerState:
    """Tracks one simulated consumer's session and orders."""

    token: str | None = None
    order_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


@dataclass
class HotProduct:
    """The single product every contention user orders from.

    ``reserved`` sums the quantities of accepted orders so the final stock
    can be checked against ``initial_stock - reserved``.
    """

    product_id: str | None = None
    initial_stock: int = 0
    reserved: int = 0
    refused: int = 0


HOT_PRODUCT = HotProduct()
