"""Pydantic request/response schemas for the Products API.

These are external contracts, separate from the internal Protean commands.
"""

from datetime import datetime

from pydantic import Field

from agrigo.catalogue.product import ProductCategory, ProductUnit
from agrigo.schemas import CamelModel


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    quantity: int = Field(ge=0)
    unit: ProductUnit = ProductUnit.KILOGRAM
    category: ProductCategory = ProductCategory.VEGETABLES
    images: list[str] = []

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Tomatoes",
                    "description": "Vine ripened, picked this morning",
                    "price": 40.0,
                    "quantity": 120,
                    "unit": "kg",
                    "category": "vegetables",
                    "images": [],
                }
            ]
        }
    }


class UpdateProductRequest(CamelModel):
    """Every field is optional; only the fields sent are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0)
    quantity: int | None = Field(default=None, ge=0)
    unit: ProductUnit | None = None
    category: ProductCategory | None = None
    images: list[str] | None = None
    is_available: bool | None = None

    def supplied_changes(self) -> dict:
        """Fields present in the request body, keyed by their Python names."""
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class FarmerCard(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    farm_name: str | None = None


class ProductResponse(CamelModel):
    id: str
    farmer_id: str
    name: str
    description: str
    price: float
    quantity: int
    unit: str
    category: str
    images: list[str]
    is_available: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    farmer: FarmerCard | None = None


class ProductEnvelope(CamelModel):
    message: str
    product: ProductResponse


class MessageResponse(CamelModel):
    message: str
