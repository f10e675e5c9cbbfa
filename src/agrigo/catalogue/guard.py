"""Ownership guard shared by product revision and removal."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from agrigo.catalogue.product import Product
from agrigo.errors import ProductNotFound, Unauthorized


def owned_product(product_id, farmer_id) -> Product:
    """Load a product and make sure ``farmer_id`` owns it.

    Raises ProductNotFound when the id does not resolve and Unauthorized
    when the product belongs to someone else.
    """
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFound() from None

    if not product.is_owned_by(farmer_id):
        raise Unauthorized("Unauthorized: Product does not belong to this farmer")

    return product
