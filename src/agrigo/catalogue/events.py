"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from agrigo.domain import agrigo


@agrigo.event(part_of="Product")
class ProductListed:
    """A farmer put a new product up for sale."""

    __version__ = 1

    product_id = Identifier(required=True)
    farmer_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True)
    quantity = Integer(required=True)
    listed_at = DateTime(required=True)


@agrigo.event(part_of="Product")
class ProductRevised:
    """The owning farmer changed one or more listing fields."""

    __version__ = 1

    product_id = Identifier(required=True)
    farmer_id = Identifier(required=True)
    revised_fields = Text(required=True)  # JSON array of field names
    price = Float()
    quantity = Integer()
    is_available = Boolean()
    revised_at = DateTime(required=True)


@agrigo.event(part_of="Product")
class StockReserved:
    """Quantity taken off hand for an order being placed."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    remaining = Integer(required=True)


@agrigo.event(part_of="Product")
class StockRestored:
    """Quantity put back on hand when an order was cancelled."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    remaining = Integer(required=True)
