"""Product listing: command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from agrigo.catalogue.product import Product
from agrigo.domain import agrigo
from agrigo.utils.concurrency import serialized_writes

logger = structlog.get_logger(__name__)


@agrigo.command(part_of="Product")
class ListProduct:
    farmer_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=0)
    unit = String(max_length=10)
    category = String(max_length=20)
    images = Text()  # JSON array of image URLs


@agrigo.command_handler(part_of=Product)
class ListProductHandler:
    @serialized_writes
    @handle(ListProduct)
    def list_product(self, command):
        product = Product.create(
            farmer_id=command.farmer_id,
            name=command.name,
            description=command.description,
            price=command.price,
            quantity=command.quantity,
            unit=command.unit,
            category=command.category,
            images=json.loads(command.images) if command.images else [],
        )
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Product listed",
            product_id=str(product.id),
            farmer_id=str(command.farmer_id),
            quantity=command.quantity,
        )
        return str(product.id)
