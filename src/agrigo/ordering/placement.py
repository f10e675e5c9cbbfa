"""Order placement: command and handler.

Validation reads every product up front. Stock is then reserved item by
item with a conditional decrement, and the order is added only once every
reservation succeeded. A refused reservation puts back the ones already
made, and the handler's unit of work discards whatever was staged.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from agrigo.catalogue.product import Product
from agrigo.domain import agrigo
from agrigo.errors import EmptyOrder, InsufficientStock, MultiSellerOrder, ProductNotFound
from agrigo.ordering.order import Order
from agrigo.utils.concurrency import serialized_writes

logger = structlog.get_logger(__name__)


@agrigo.command(part_of="Order")
class PlaceOrder:
    consumer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {"product_id", "quantity"}
    delivery_address = Text(required=True)  # JSON: {"street", "city", "pincode"}
    payment_method = String(required=True, max_length=20)


def _load_product(product_repo, product_id) -> Product:
    try:
        return product_repo.get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFound(product_id) from None


@agrigo.command_handler(part_of=Order)
class PlaceOrderHandler:
    @serialized_writes
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = json.loads(command.items)
        if not requested:
            raise EmptyOrder()

        product_repo = current_domain.repository_for(Product)

        try:
            anchor = product_repo.get(requested[0]["product_id"])
        except ObjectNotFoundError:
            raise ProductNotFound() from None
        farmer_id = str(anchor.farmer_id)

        lines = []
        for entry in requested:
            product = _load_product(product_repo, entry["product_id"])
            quantity = int(entry["quantity"])

            if not product.is_owned_by(farmer_id):
                raise MultiSellerOrder(product.id)
            if not product.has_stock_for(quantity):
                raise InsufficientStock(product.id, product.name, quantity, available=product.quantity)

            lines.append({"product_id": str(product.id), "quantity": quantity, "unit_price": product.price})

        order = Order.place(
            consumer_id=command.consumer_id,
            farmer_id=farmer_id,
            lines=lines,
            delivery_address=json.loads(command.delivery_address),
            payment_method=command.payment_method,
        )

        reserved = []
        for line in lines:
            if not product_repo.reserve_stock(line["product_id"], line["quantity"], order_id=order.id):
                logger.warning(
                    "Stock reservation refused",
                    order_id=str(order.id),
                    product_id=line["product_id"],
                    requested=line["quantity"],
                )
                product = product_repo.get(line["product_id"])
                for done in reversed(reserved):
                    product_repo.restore_stock(done["product_id"], done["quantity"], order_id=order.id)
                raise InsufficientStock(product.id, product.name, line["quantity"], available=product.quantity)
            reserved.append(line)

        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            consumer_id=str(command.consumer_id),
            farmer_id=farmer_id,
            total_amount=order.total_amount,
        )
        return str(order.id)
