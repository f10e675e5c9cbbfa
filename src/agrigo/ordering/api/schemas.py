"""Pydantic request/response schemas for the Orders API."""

from datetime import datetime

from pydantic import Field

from agrigo.ordering.order import OrderStatus, PaymentMethod, PaymentStatus
from agrigo.schemas import CamelModel


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class DeliveryAddressSchema(CamelModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    pincode: str = Field(min_length=1)


class OrderLineRequest(CamelModel):
    product_id: str
    quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class PlaceOrderRequest(CamelModel):
    products: list[OrderLineRequest]
    delivery_address: DeliveryAddressSchema
    payment_method: PaymentMethod

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "products": [{"productId": "prod-001", "quantity": 2}],
                    "deliveryAddress": {"street": "12 Mill Road", "city": "Pune", "pincode": "411001"},
                    "paymentMethod": "cash",
                }
            ]
        }
    }


class UpdateStatusRequest(CamelModel):
    status: OrderStatus


class UpdatePaymentRequest(CamelModel):
    payment_status: PaymentStatus


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class ConsumerCard(CamelModel):
    id: str
    name: str
    email: str
    phone: str


class FarmerCard(ConsumerCard):
    farm_name: str | None = None


class ProductCard(CamelModel):
    id: str
    name: str
    description: str
    price: float
    unit: str


class OrderItemResponse(CamelModel):
    product_id: str
    quantity: int
    unit_price: float
    product: ProductCard | None = None


class OrderResponse(CamelModel):
    id: str
    consumer_id: str
    farmer_id: str
    consumer: ConsumerCard | None = None
    farmer: FarmerCard | None = None
    items: list[OrderItemResponse]
    total_amount: float
    delivery_address: DeliveryAddressSchema
    payment_method: str
    status: str
    payment_status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderEnvelope(CamelModel):
    message: str
    order: OrderResponse
