"""Request/response schemas for product endpoints."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductRequest(BaseModel):
    """Create/update payload; update replaces every field."""

    sku: str = Field(..., min_length=1, max_length=64, description="SKU is required")
    name: str = Field(..., min_length=1, max_length=255, description="Product name is required")
    price: Decimal = Field(..., gt=0, max_digits=19, decimal_places=2, description="Price must be greater than 0")
    stock_quantity: int = Field(..., ge=0, description="Stock quantity must be at least 0")

    @field_validator("sku", "name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sku: str
    name: str
    price: Decimal
    stock_quantity: int
