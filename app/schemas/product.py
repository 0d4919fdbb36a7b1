# app/schemas/product.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator


def _quantize_price(v: Decimal) -> Decimal:
    # Aliniază la NUMERIC(12,2) și evită erori de reprezentare
    return v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class _ProductFields(BaseModel):
    """
    Câmpurile de intrare comune (create/update).
    Body-ul acceptă doar `subCategory` (camelCase); intern și în DB e `sub_category`.
    Fără validări de interval: valorile ajung la store așa cum vin.
    """
    name: str
    price: Decimal
    category: str
    sub_category: str = Field(..., alias="subCategory")
    sku: str

    @field_validator("price")
    @classmethod
    def _price_quantize(cls, v: Decimal) -> Decimal:
        return _quantize_price(v)

    def to_row(self) -> dict:
        """Valori mapate pe numele coloanelor (snake_case)."""
        return self.model_dump(by_alias=False)


class ProductCreate(_ProductFields):
    """Payload pentru creare produs; `disabled` e lăsat pe default-ul din DB."""
    description: Optional[str] = None
    image: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Widget",
                    "price": "9.99",
                    "category": "Tools",
                    "subCategory": "Hand",
                    "sku": "W-1",
                    "description": "Steel hand widget",
                    "image": "",
                }
            ]
        },
    )


class ProductUpdate(_ProductFields):
    """
    Payload pentru update: înlocuire completă, TOATE câmpurile sunt obligatorii.
    `description`/`image` pot fi null, dar cheia trebuie trimisă explicit.
    """
    description: Optional[str] = Field(...)
    image: Optional[str] = Field(...)
    disabled: bool


class ProductRead(BaseModel):
    """Răspuns pentru produs: cheile sunt numele coloanelor din `products`."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
    category: str
    sub_category: str
    sku: str
    description: Optional[str] = None
    image: Optional[str] = None
    disabled: bool
