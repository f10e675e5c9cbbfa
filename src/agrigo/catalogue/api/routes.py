"""FastAPI endpoints for product listings."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from agrigo.catalogue.api.schemas import (
    CreateProductRequest,
    MessageResponse,
    ProductEnvelope,
    ProductResponse,
    UpdateProductRequest,
)
from agrigo.catalogue.listing import ListProduct
from agrigo.catalogue.queries import all_products, product_detail, products_of_farmer
from agrigo.catalogue.revision import RemoveProduct, ReviseProduct
from agrigo.identity.guards import require_farmer
from agrigo.identity.port import Principal

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products() -> list[dict]:
    return all_products()


@router.get("/farmer/products", response_model=list[ProductResponse])
async def list_farmer_products(farmer: Principal = Depends(require_farmer)) -> list[dict]:
    return products_of_farmer(farmer.user_id)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> dict:
    return product_detail(product_id)


@router.post("", status_code=201, response_model=ProductEnvelope)
async def create_product(body: CreateProductRequest, farmer: Principal = Depends(require_farmer)) -> dict:
    command = ListProduct(
        farmer_id=farmer.user_id,
        name=body.name,
        description=body.description,
        price=body.price,
        quantity=body.quantity,
        unit=body.unit.value,
        category=body.category.value,
        images=json.dumps(body.images),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return {"message": "Product created successfully", "product": product_detail(product_id)}


@router.put("/{product_id}", response_model=ProductEnvelope)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    farmer: Principal = Depends(require_farmer),
) -> dict:
    command = ReviseProduct(
        product_id=product_id,
        farmer_id=farmer.user_id,
        changes=json.dumps(body.supplied_changes()),
    )
    current_domain.process(command, asynchronous=False)
    return {"message": "Product updated successfully", "product": product_detail(product_id)}


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, farmer: Principal = Depends(require_farmer)) -> MessageResponse:
    current_domain.process(RemoveProduct(product_id=product_id, farmer_id=farmer.user_id), asynchronous=False)
    return MessageResponse(message="Product deleted successfully")
