"""Owner-only product revision and removal: commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from agrigo.catalogue.guard import owned_product
from agrigo.catalogue.product import REVISABLE_FIELDS, Product
from agrigo.domain import agrigo
from agrigo.utils.concurrency import serialized_writes

logger = structlog.get_logger(__name__)


@agrigo.command(part_of="Product")
class ReviseProduct:
    product_id = Identifier(required=True)
    farmer_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object holding only the supplied fields


@agrigo.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)
    farmer_id = Identifier(required=True)


@agrigo.command_handler(part_of=Product)
class ProductRevisionHandler:
    @serialized_writes
    @handle(ReviseProduct)
    def revise_product(self, command):
        changes = json.loads(command.changes)
        unknown = sorted(set(changes) - set(REVISABLE_FIELDS))
        if unknown:
            raise ValidationError({"changes": [f"Fields cannot be revised: {', '.join(unknown)}"]})

        product = owned_product(command.product_id, command.farmer_id)
        revised = product.revise(**changes)
        current_domain.repository_for(Product).add(product)

        logger.info("Product revised", product_id=str(product.id), fields=revised)
        return str(product.id)

    @serialized_writes
    @handle(RemoveProduct)
    def remove_product(self, command):
        product = owned_product(command.product_id, command.farmer_id)
        current_domain.repository_for(Product)._dao.delete(product)

        logger.info("Product removed", product_id=str(command.product_id), farmer_id=str(command.farmer_id))
