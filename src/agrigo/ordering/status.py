"""Farmer-driven order status and payment status updates."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from agrigo.domain import agrigo
from agrigo.errors import NotFoundOrUnauthorized
from agrigo.ordering.cancellation import restock
from agrigo.ordering.order import CancellationActor, Order, OrderStatus
from agrigo.utils.concurrency import serialized_writes

logger = structlog.get_logger(__name__)


@agrigo.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    farmer_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@agrigo.command(part_of="Order")
class UpdatePaymentStatus:
    order_id = Identifier(required=True)
    farmer_id = Identifier(required=True)
    payment_status = String(required=True, max_length=20)


def _order_sold_by(order_id, farmer_id) -> Order:
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFoundOrUnauthorized() from None
    if not order.is_sold_by(farmer_id):
        raise NotFoundOrUnauthorized()
    return order


@agrigo.command_handler(part_of=Order)
class OrderStatusHandler:
    @serialized_writes
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        order = _order_sold_by(command.order_id, command.farmer_id)
        previous = order.status

        order.advance_to(command.status)
        current_domain.repository_for(Order).add(order)

        if order.status == OrderStatus.CANCELLED.value:
            restock(order)
            logger.info("Order cancelled", order_id=str(order.id), cancelled_by=CancellationActor.FARMER.value)
        else:
            logger.info("Order status changed", order_id=str(order.id), previous=previous, current=order.status)
        return str(order.id)

    @serialized_writes
    @handle(UpdatePaymentStatus)
    def update_payment_status(self, command):
        order = _order_sold_by(command.order_id, command.farmer_id)

        order.set_payment_status(command.payment_status)
        current_domain.repository_for(Order).add(order)

        logger.info("Payment status changed", order_id=str(order.id), payment_status=order.payment_status)
        return str(order.id)
