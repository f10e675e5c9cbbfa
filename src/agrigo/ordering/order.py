"""Order aggregate: one consumer buying from one farmer.

State Machine:
    PENDING -> CONFIRMED -> DELIVERED
    PENDING -> CANCELLED

Payment status is a separate label moved by the farmer and is not tied to
the order status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from agrigo.domain import agrigo
from agrigo.errors import InvalidTransition
from agrigo.ordering.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentStatusChanged,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"


class CancellationActor(Enum):
    CONSUMER = "consumer"
    FARMER = "farmer"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def _parse(enum_cls, value, field):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError({field: [f"'{value}' is not one of: {allowed}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@agrigo.value_object(part_of="Order")
class DeliveryAddress:
    """Where the order goes. Captured at placement and never edited."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    pincode = String(required=True, max_length=20)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@agrigo.entity(part_of="Order")
class OrderItem:
    """A line item: product, quantity and the unit price frozen at placement."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@agrigo.aggregate
class Order:
    consumer_id = Identifier(required=True)
    farmer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    delivery_address = ValueObject(DeliveryAddress, required=True)
    payment_method = String(choices=PaymentMethod, required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_line_items(self):
        expected = round(sum(item.line_total for item in self.items), 2)
        if abs(expected - self.total_amount) > 0.005:
            raise ValidationError(
                {"total_amount": [f"Total {self.total_amount} does not match line items ({expected})"]}
            )

    @invariant.post
    def must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["An order needs at least one line item"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, consumer_id, farmer_id, lines, delivery_address, payment_method):
        """Create a pending order.

        Args:
            consumer_id: The buyer.
            farmer_id: The single seller every line belongs to.
            lines: List of dicts with product_id, quantity and unit_price, the
                   price being the product's price at this moment.
            delivery_address: Dict with street, city, pincode.
            payment_method: One of PaymentMethod values.
        """
        method = _parse(PaymentMethod, payment_method, "payment_method")
        now = datetime.now(UTC)

        items = [
            OrderItem(
                product_id=line["product_id"],
                quantity=line["quantity"],
                unit_price=line["unit_price"],
            )
            for line in lines
        ]
        total = round(sum(item.line_total for item in items), 2)

        order = cls(
            consumer_id=consumer_id,
            farmer_id=farmer_id,
            items=items,
            total_amount=total,
            delivery_address=DeliveryAddress(**delivery_address),
            payment_method=method.value,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                consumer_id=str(consumer_id),
                farmer_id=str(farmer_id),
                item_count=len(items),
                total_amount=total,
                payment_method=method.value,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Participants
    # -------------------------------------------------------------------
    def is_sold_by(self, farmer_id) -> bool:
        return str(self.farmer_id) == str(farmer_id)

    def is_bought_by(self, consumer_id) -> bool:
        return str(self.consumer_id) == str(consumer_id)

    def involves(self, user_id) -> bool:
        return self.is_bought_by(user_id) or self.is_sold_by(user_id)

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidTransition(
                f"Cannot move order from {current.value} to {target_status.value}",
                current_status=current.value,
                requested_status=target_status.value,
            )

    def advance_to(self, status):
        """Farmer-driven move along the state machine.

        Cancellation is delegated to ``cancel`` so it is recorded the same way
        whoever triggers it.
        """
        target = _parse(OrderStatus, status, "status")
        if target == OrderStatus.CANCELLED:
            self.cancel(cancelled_by=CancellationActor.FARMER.value)
            return

        self._assert_can_transition(target)
        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    def set_payment_status(self, payment_status):
        """Overwrite the payment label; any known value may replace any other."""
        target = _parse(PaymentStatus, payment_status, "payment_status")
        previous = self.payment_status
        now = datetime.now(UTC)
        self.payment_status = target.value
        self.updated_at = now

        self.raise_(
            PaymentStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    def cancel(self, cancelled_by=CancellationActor.CONSUMER.value):
        """Cancel a pending order. Restocking is up to the caller."""
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise InvalidTransition(
                "Only pending orders can be cancelled",
                current_status=self.status,
            )

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                cancelled_by=cancelled_by,
                cancelled_at=now,
            )
        )
