"""Order reads with participant filtering and display enrichment.

Every read returns plain dicts: the order's own fields plus the current
display fields of each line's product and of both participants. A product
removed after placement projects as ``None``; the frozen ``unit_price`` on
the line is unaffected.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from agrigo.catalogue.product import Product
from agrigo.errors import OrderNotFound, Unauthorized
from agrigo.identity.cards import consumer_card, farmer_card
from agrigo.ordering.order import Order


def _product_card(product_id) -> dict | None:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "unit": product.unit,
    }


def order_view(order: Order) -> dict:
    return {
        "id": str(order.id),
        "consumer_id": str(order.consumer_id),
        "farmer_id": str(order.farmer_id),
        "consumer": consumer_card(order.consumer_id),
        "farmer": farmer_card(order.farmer_id),
        "items": [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "product": _product_card(item.product_id),
            }
            for item in order.items
        ],
        "total_amount": order.total_amount,
        "delivery_address": {
            "street": order.delivery_address.street,
            "city": order.delivery_address.city,
            "pincode": order.delivery_address.pincode,
        },
        "payment_method": order.payment_method,
        "status": order.status,
        "payment_status": order.payment_status,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def order_view_by_id(order_id) -> dict:
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFound(order_id) from None
    return order_view(order)


def orders_for_consumer(consumer_id) -> list[dict]:
    """Orders the consumer placed, newest first."""
    return [order_view(order) for order in current_domain.repository_for(Order).placed_by(consumer_id)]


def orders_for_farmer(farmer_id) -> list[dict]:
    """Orders addressed to the farmer, newest first."""
    return [order_view(order) for order in current_domain.repository_for(Order).received_by(farmer_id)]


def order_for_participant(order_id, user_id) -> dict:
    """One order, visible only to its consumer and its farmer."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFound(order_id) from None

    if not order.involves(user_id):
        raise Unauthorized("Unauthorized access")
    return order_view(order)
