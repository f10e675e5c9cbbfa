"""Repository for the Product aggregate.

Besides the standard persistence operations it owns the two stock
movements. Each one writes the new quantity only where the store still
holds the quantity it was computed from; a lost race surfaces as
``ExpectedVersionError``, which Protean's handler retry answers by running
the command again on fresh reads.
"""

from protean.exceptions import ExpectedVersionError
from protean.utils.query import Q

from agrigo.catalogue.product import Product
from agrigo.domain import agrigo


@agrigo.repository(part_of=Product)
class ProductRepository:
    def listed(self) -> list[Product]:
        """All products, newest first."""
        return self._dao.query.order_by("-created_at").limit(None).all().items

    def find_by_farmer(self, farmer_id) -> list[Product]:
        """Products owned by one farmer, newest first."""
        return self._dao.query.filter(farmer_id=str(farmer_id)).order_by("-created_at").limit(None).all().items

    def reserve_stock(self, product_id, quantity, order_id=None) -> bool:
        """Decrement quantity-on-hand by ``quantity`` only if that much is left.

        Returns False, writing nothing, when stock is short. Raises
        ObjectNotFoundError for an unknown product.
        """
        product = self.get(product_id)
        on_hand = product.quantity
        if not product.reserve(quantity, order_id=order_id):
            return False
        self._write_quantity(product, on_hand)
        return True

    def restore_stock(self, product_id, quantity, order_id=None) -> Product:
        """Increment quantity-on-hand; the inverse of a successful reservation."""
        product = self.get(product_id)
        on_hand = product.quantity
        product.restore(quantity, order_id=order_id)
        self._write_quantity(product, on_hand)
        return product

    def _write_quantity(self, product: Product, on_hand: int) -> None:
        # UPDATE ... SET quantity = :new WHERE id = :id AND quantity = :on_hand
        written = self._dao._update_all(Q(id=str(product.id), quantity=on_hand), quantity=product.quantity)
        if written != 1:
            raise ExpectedVersionError(
                f"Stock of product {product.id} changed from {on_hand} before it could be written"
            )
        self.add(product)
