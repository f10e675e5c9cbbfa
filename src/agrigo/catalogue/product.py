"""Product aggregate: a farmer's listing and its quantity-on-hand.

Quantity-on-hand is the one resource shared between listing edits, order
placement (reservation) and order cancellation (restoration).
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from agrigo.domain import agrigo


class ProductUnit(Enum):
    GRAM = "g"
    KILOGRAM = "kg"
    DOZEN = "dozen"
    LITRE = "litre"


class ProductCategory(Enum):
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    GRAINS = "grains"
    OTHER = "other"


# Fields a farmer may revise on an existing listing
REVISABLE_FIELDS = (
    "name",
    "description",
    "price",
    "quantity",
    "unit",
    "category",
    "images",
    "is_available",
)

_UNSET = object()


@agrigo.aggregate
class Product:
    farmer_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=0)
    unit = String(choices=ProductUnit, default=ProductUnit.KILOGRAM.value)
    category = String(choices=ProductCategory, default=ProductCategory.VEGETABLES.value)
    images = Text()  # JSON array of image URLs
    is_available = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        farmer_id,
        name,
        description,
        price,
        quantity,
        unit=None,
        category=None,
        images=None,
    ):
        """List a new product for sale."""
        from agrigo.catalogue.events import ProductListed

        now = datetime.now(UTC)
        product = cls(
            farmer_id=farmer_id,
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            unit=unit or ProductUnit.KILOGRAM.value,
            category=category or ProductCategory.VEGETABLES.value,
            images=json.dumps(list(images or [])),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=str(product.id),
                farmer_id=str(farmer_id),
                name=name,
                price=price,
                quantity=quantity,
                listed_at=now,
            )
        )
        return product

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    def is_owned_by(self, farmer_id) -> bool:
        return str(self.farmer_id) == str(farmer_id)

    def has_stock_for(self, quantity) -> bool:
        return self.quantity >= quantity

    # -------------------------------------------------------------------
    # Listing edits
    # -------------------------------------------------------------------
    def revise(
        self,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        quantity=_UNSET,
        unit=_UNSET,
        category=_UNSET,
        images=_UNSET,
        is_available=_UNSET,
    ):
        """Apply only the fields that were supplied.

        ``is_available=False`` or ``quantity=0`` are real values, not
        "no change"; absence is signalled by leaving the argument out.
        """
        from agrigo.catalogue.events import ProductRevised

        changes = {
            "name": name,
            "description": description,
            "price": price,
            "quantity": quantity,
            "unit": unit,
            "category": category,
            "images": images,
            "is_available": is_available,
        }
        changes = {field: value for field, value in changes.items() if value is not _UNSET}
        if not changes:
            return []

        for field, value in changes.items():
            if field == "images":
                value = json.dumps(list(value or []))
            setattr(self, field, value)

        now = datetime.now(UTC)
        self.updated_at = now

        revised = sorted(changes)
        self.raise_(
            ProductRevised(
                product_id=str(self.id),
                farmer_id=str(self.farmer_id),
                revised_fields=json.dumps(revised),
                price=self.price,
                quantity=self.quantity,
                is_available=self.is_available,
                revised_at=now,
            )
        )
        return revised

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def reserve(self, quantity, order_id=None) -> bool:
        """Take ``quantity`` off hand if, and only if, enough is left.

        Returns False and leaves the product untouched otherwise.
        """
        from agrigo.catalogue.events import StockReserved

        if quantity < 1:
            raise ValidationError({"quantity": ["Reserved quantity must be at least 1"]})
        if self.quantity < quantity:
            return False

        self.quantity = self.quantity - quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockReserved(
                product_id=str(self.id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                remaining=self.quantity,
            )
        )
        return True

    def restore(self, quantity, order_id=None):
        """Put back stock taken by an earlier reservation."""
        from agrigo.catalogue.events import StockRestored

        if quantity < 1:
            raise ValidationError({"quantity": ["Restored quantity must be at least 1"]})

        self.quantity = self.quantity + quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockRestored(
                product_id=str(self.id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                remaining=self.quantity,
            )
        )
