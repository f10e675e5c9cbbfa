"""Marketplace error kinds.

Each kind carries the HTTP status it maps to. ``agrigo.error_handlers``
renders them as ``{"message": ..., "error": ...}``.
"""


class MarketplaceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    error = "InternalError"

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {"message": self.message, "error": self.error, **self.details}


# ---------------------------------------------------------------------------
# 404
# ---------------------------------------------------------------------------
class NotFound(MarketplaceError):
    status_code = 404
    error = "NotFound"


class ProductNotFound(NotFound):
    error = "ProductNotFound"

    def __init__(self, product_id=None):
        if product_id is None:
            super().__init__("Product not found")
        else:
            super().__init__(f"Product {product_id} not found", product_id=str(product_id))


class OrderNotFound(NotFound):
    error = "OrderNotFound"

    def __init__(self, order_id):
        super().__init__("Order not found", order_id=str(order_id))


class NotFoundOrUnauthorized(NotFound):
    """Merges absence and foreign ownership so non-owners cannot discover ids."""

    error = "NotFoundOrUnauthorized"

    def __init__(self):
        super().__init__("Order not found or unauthorized")


# ---------------------------------------------------------------------------
# 401 / 403
# ---------------------------------------------------------------------------
class Unauthenticated(MarketplaceError):
    status_code = 401
    error = "Unauthenticated"


class IncorrectPassword(Unauthenticated):
    def __init__(self):
        super().__init__("Incorrect password")


class Unauthorized(MarketplaceError):
    status_code = 403
    error = "Unauthorized"


# ---------------------------------------------------------------------------
# 400
# ---------------------------------------------------------------------------
class InvalidRequest(MarketplaceError):
    status_code = 400
    error = "ValidationError"


class EmptyOrder(InvalidRequest):
    def __init__(self):
        super().__init__("An order needs at least one product")


class MultiSellerOrder(InvalidRequest):
    error = "MultiSellerOrder"

    def __init__(self, product_id):
        super().__init__("All products must be from the same farmer", product_id=str(product_id))


class InsufficientStock(InvalidRequest):
    error = "InsufficientStock"

    def __init__(self, product_id, product_name, requested, available=None):
        details = {"product_id": str(product_id), "requested": requested}
        if available is not None:
            details["available"] = available
        super().__init__(f"Insufficient quantity for product {product_name}", **details)


class InvalidTransition(MarketplaceError):
    status_code = 400
    error = "InvalidTransition"


class DuplicateAccount(InvalidRequest):
    def __init__(self):
        super().__init__("User already registered")


class UnknownAccount(InvalidRequest):
    error = "UnknownAccount"

    def __init__(self):
        super().__init__("User not found, please register")


# ---------------------------------------------------------------------------
# 500
# ---------------------------------------------------------------------------
class InternalError(MarketplaceError):
    status_code = 500
    error = "InternalError"
