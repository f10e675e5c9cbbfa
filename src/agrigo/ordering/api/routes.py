"""FastAPI endpoints for orders. Every route needs an authenticated caller."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from agrigo.identity.guards import current_principal, require_farmer
from agrigo.identity.port import Principal
from agrigo.ordering.api.schemas import (
    OrderEnvelope,
    OrderResponse,
    PlaceOrderRequest,
    UpdatePaymentRequest,
    UpdateStatusRequest,
)
from agrigo.ordering.cancellation import CancelOrder
from agrigo.ordering.placement import PlaceOrder
from agrigo.ordering.queries import (
    order_for_participant,
    order_view_by_id,
    orders_for_consumer,
    orders_for_farmer,
)
from agrigo.ordering.status import UpdateOrderStatus, UpdatePaymentStatus

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=201, response_model=OrderEnvelope)
async def place_order(body: PlaceOrderRequest, caller: Principal = Depends(current_principal)) -> dict:
    command = PlaceOrder(
        consumer_id=caller.user_id,
        items=json.dumps([{"product_id": line.product_id, "quantity": line.quantity} for line in body.products]),
        delivery_address=json.dumps(body.delivery_address.model_dump()),
        payment_method=body.payment_method.value,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return {"message": "Order created successfully", "order": order_view_by_id(order_id)}


@router.get("/consumer", response_model=list[OrderResponse])
async def consumer_orders(caller: Principal = Depends(current_principal)) -> list[dict]:
    return orders_for_consumer(caller.user_id)


@router.get("/farmer", response_model=list[OrderResponse])
async def farmer_orders(farmer: Principal = Depends(require_farmer)) -> list[dict]:
    return orders_for_farmer(farmer.user_id)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, caller: Principal = Depends(current_principal)) -> dict:
    return order_for_participant(order_id, caller.user_id)


@router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_status(
    order_id: str,
    body: UpdateStatusRequest,
    farmer: Principal = Depends(require_farmer),
) -> dict:
    command = UpdateOrderStatus(order_id=order_id, farmer_id=farmer.user_id, status=body.status.value)
    current_domain.process(command, asynchronous=False)
    return {"message": "Order status updated successfully", "order": order_view_by_id(order_id)}


@router.put("/{order_id}/payment", response_model=OrderEnvelope)
async def update_payment(
    order_id: str,
    body: UpdatePaymentRequest,
    farmer: Principal = Depends(require_farmer),
) -> dict:
    command = UpdatePaymentStatus(
        order_id=order_id,
        farmer_id=farmer.user_id,
        payment_status=body.payment_status.value,
    )
    current_domain.process(command, asynchronous=False)
    return {"message": "Payment status updated successfully", "order": order_view_by_id(order_id)}


@router.put("/{order_id}/cancel", response_model=OrderEnvelope)
async def cancel_order(order_id: str, caller: Principal = Depends(current_principal)) -> dict:
    current_domain.process(CancelOrder(order_id=order_id, consumer_id=caller.user_id), asynchronous=False)
    return {"message": "Order cancelled successfully", "order": order_view_by_id(order_id)}
