import json

import pytest
from protean import current_domain

from agrigo.ordering.placement import PlaceOrder

ADDRESS = {"street": "12 Mill Road", "city": "Pune", "pincode": "411001"}


@pytest.fixture()
def place_order():
    """Factory placing an order for ``buyer`` with ``(product_id, quantity)`` lines."""

    def _place(buyer, *lines, payment_method="cash"):
        return current_domain.process(
            PlaceOrder(
                consumer_id=str(buyer.id),
                items=json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in lines]),
                delivery_address=json.dumps(ADDRESS),
                payment_method=payment_method,
            ),
            asynchronous=False,
        )

    return _place
