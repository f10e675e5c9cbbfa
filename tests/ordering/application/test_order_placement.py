"""Application tests for placing orders against shared stock."""

import pytest
from protean import current_domain

from agrigo.catalogue.product import Product
from agrigo.errors import EmptyOrder, InsufficientStock, MultiSellerOrder, ProductNotFound
from agrigo.ordering.order import Order


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


class TestPlaceOrder:
    def test_creates_pending_order(self, farmer, consumer, list_product, place_order):
        tomatoes = list_product(farmer, name="Tomatoes", price=40.0, quantity=10)
        onions = list_product(farmer, name="Onions", price=25.5, quantity=20)

        order_id = place_order(consumer, (tomatoes, 2), (onions, 4))

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "pending"
        assert order.payment_status == "pending"
        assert str(order.farmer_id) == str(farmer.id)
        assert str(order.consumer_id) == str(consumer.id)
        assert order.total_amount == 182.0
        assert order.payment_method == "cash"

    def test_decrements_stock(self, farmer, consumer, list_product, place_order, stock_of):
        tomatoes = list_product(farmer, quantity=10)
        place_order(consumer, (tomatoes, 4))
        assert stock_of(tomatoes) == 6

    def test_same_product_twice_is_reserved_twice(self, farmer, consumer, list_product, place_order, stock_of):
        tomatoes = list_product(farmer, quantity=10)
        place_order(consumer, (tomatoes, 3), (tomatoes, 2))
        assert stock_of(tomatoes) == 5

    def test_prices_are_frozen(self, farmer, consumer, list_product, place_order):
        tomatoes = list_product(farmer, price=40.0, quantity=10)
        order_id = place_order(consumer, (tomatoes, 2))

        repo = current_domain.repository_for(Product)
        product = repo.get(tomatoes)
        product.revise(price=99.0)
        repo.add(product)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.items[0].unit_price == 40.0
        assert order.total_amount == 80.0

    def test_stores_order_placed_event(self, farmer, consumer, list_product, place_order):
        tomatoes = list_product(farmer)
        place_order(consumer, (tomatoes, 1))

        messages = current_domain.event_store.store.read("agrigo::order")
        placed = [
            m
            for m in messages
            if m.metadata and m.metadata.headers and m.metadata.headers.type == "Agrigo.OrderPlaced.v1"
        ]
        assert len(placed) == 1


class TestPlacementRejections:
    def test_products_from_two_farmers(self, farmer, other_farmer, consumer, list_product, place_order, stock_of):
        ours = list_product(farmer, quantity=10)
        theirs = list_product(other_farmer, quantity=10)

        with pytest.raises(MultiSellerOrder) as exc:
            place_order(consumer, (ours, 2), (theirs, 1))

        assert exc.value.message == "All products must be from the same farmer"
        assert _orders() == []
        assert stock_of(ours) == 10
        assert stock_of(theirs) == 10

    def test_insufficient_stock_names_the_product(self, farmer, consumer, list_product, place_order, stock_of):
        tomatoes = list_product(farmer, name="Tomatoes", quantity=10)
        okra = list_product(farmer, name="Okra", quantity=1)

        with pytest.raises(InsufficientStock) as exc:
            place_order(consumer, (tomatoes, 2), (okra, 5))

        assert exc.value.message == "Insufficient quantity for product Okra"
        assert _orders() == []
        assert stock_of(tomatoes) == 10

    def test_unknown_first_product(self, consumer, place_order):
        with pytest.raises(ProductNotFound) as exc:
            place_order(consumer, ("missing-id", 1))
        assert exc.value.message == "Product not found"

    def test_unknown_later_product(self, farmer, consumer, list_product, place_order, stock_of):
        tomatoes = list_product(farmer, quantity=10)

        with pytest.raises(ProductNotFound) as exc:
            place_order(consumer, (tomatoes, 1), ("missing-id", 1))

        assert exc.value.message == "Product missing-id not found"
        assert stock_of(tomatoes) == 10

    def test_empty_order(self, consumer, place_order):
        with pytest.raises(EmptyOrder):
            place_order(consumer)
