"""Product reads with the owning farmer's display fields."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from agrigo.catalogue.product import Product
from agrigo.errors import ProductNotFound
from agrigo.identity.cards import farmer_card


def product_view(product: Product, with_farmer: bool = True) -> dict:
    view = {
        "id": str(product.id),
        "farmer_id": str(product.farmer_id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "quantity": product.quantity,
        "unit": product.unit,
        "category": product.category,
        "images": product.image_urls,
        "is_available": product.is_available,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }
    if with_farmer:
        view["farmer"] = farmer_card(product.farmer_id)
    return view


def all_products() -> list[dict]:
    return [product_view(product) for product in current_domain.repository_for(Product).listed()]


def products_of_farmer(farmer_id) -> list[dict]:
    products = current_domain.repository_for(Product).find_by_farmer(farmer_id)
    return [product_view(product, with_farmer=False) for product in products]


def product_detail(product_id) -> dict:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFound() from None
    return product_view(product)
