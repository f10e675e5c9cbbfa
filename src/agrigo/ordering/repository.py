"""Repository for the Order aggregate."""

from agrigo.domain import agrigo
from agrigo.ordering.order import Order


@agrigo.repository(part_of=Order)
class OrderRepository:
    def placed_by(self, consumer_id) -> list[Order]:
        """Orders a consumer placed, newest first."""
        return self._dao.query.filter(consumer_id=str(consumer_id)).order_by("-created_at").limit(None).all().items

    def received_by(self, farmer_id) -> list[Order]:
        """Orders addressed to a farmer, newest first."""
        return self._dao.query.filter(farmer_id=str(farmer_id)).order_by("-created_at").limit(None).all().items
