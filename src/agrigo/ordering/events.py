"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from agrigo.domain import agrigo


@agrigo.event(part_of="Order")
class OrderPlaced:
    """A consumer placed an order and its stock was reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    consumer_id = Identifier(required=True)
    farmer_id = Identifier(required=True)
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True, max_length=20)
    placed_at = DateTime(required=True)


@agrigo.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    changed_at = DateTime(required=True)


@agrigo.event(part_of="Order")
class PaymentStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    changed_at = DateTime(required=True)


@agrigo.event(part_of="Order")
class OrderCancelled:
    """A pending order was cancelled; its stock goes back on hand."""

    __version__ = 1

    order_id = Identifier(required=True)
    cancelled_by = String(required=True, max_length=20)
    cancelled_at = DateTime(required=True)
