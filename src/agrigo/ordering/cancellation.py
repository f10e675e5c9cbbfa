"""Order cancellation and restocking: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from agrigo.catalogue.product import Product
from agrigo.domain import agrigo
from agrigo.errors import NotFoundOrUnauthorized
from agrigo.ordering.order import CancellationActor, Order
from agrigo.utils.concurrency import serialized_writes

logger = structlog.get_logger(__name__)


@agrigo.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    consumer_id = Identifier(required=True)


def restock(order: Order) -> None:
    """Give every line item's quantity back to its product.

    Products removed since placement have nothing to restore and are skipped.
    """
    product_repo = current_domain.repository_for(Product)
    for item in order.items:
        try:
            product_repo.restore_stock(item.product_id, item.quantity, order_id=order.id)
        except ObjectNotFoundError:
            logger.warning(
                "Restock skipped for removed product",
                order_id=str(order.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
            )


@agrigo.command_handler(part_of=Order)
class CancelOrderHandler:
    @serialized_writes
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFoundOrUnauthorized() from None
        if not order.is_bought_by(command.consumer_id):
            raise NotFoundOrUnauthorized()

        order.cancel(cancelled_by=CancellationActor.CONSUMER.value)
        repo.add(order)
        restock(order)

        logger.info("Order cancelled", order_id=str(order.id), cancelled_by=CancellationActor.CONSUMER.value)
        return str(order.id)
