# inventory_service/schemas.py

"""
Pydantic schemas for the Inventory Service API.
These define the data structures for incoming requests and outgoing responses.
Request bodies only check types; required-field presence is decided by the
endpoints so that missing fields produce the service's own 400 response.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Body of POST /api/products and PUT /api/products/{id}.
# Every field is optional here; creation checks presence itself.
class ProductPayload(BaseModel):
    name: Optional[str] = Field(None, description="Name of the product.")
    category: Optional[str] = Field(None, description="Category the product belongs to.")
    # Numbers may arrive as text; the storage layer converts them.
    quantity: Optional[Union[int, str]] = Field(None, description="Units in stock.")
    price: Optional[Union[float, str]] = Field(None, description="Unit price.")
    description: Optional[str] = Field(None, description="Free-text description.")

    def missing_required(self) -> bool:
        # name/category must be non-empty; quantity/price only need to be sent
        # (0, "" and null all count as present).
        return (
            not self.name
            or not self.category
            or "quantity" not in self.model_fields_set
            or "price" not in self.model_fields_set
        )

    def to_fields(self) -> dict:
        fields = self.model_dump()
        fields["description"] = self.description or ""
        return fields


class ProductResponse(BaseModel):
    id: int = Field(..., description="Unique identifier of the product.")
    name: str
    category: str
    quantity: int
    price: float
    description: str = ""
    created_at: datetime = Field(..., description="Timestamp when the product was created.")
    updated_at: datetime = Field(..., description="Timestamp when the product was last updated.")

    model_config = ConfigDict(from_attributes=True)


class ProductCreated(BaseModel):
    id: int
    message: str


class MessageResponse(BaseModel):
    message: str


class StatsResponse(BaseModel):
    total_products: int
    total_items: int
    categories: int
    total_value: float


class HealthResponse(BaseModel):
    status: str
    mode: str
