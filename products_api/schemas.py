# products_api/schemas.py

"""
Pydantic schemas for the Products API.
These define the data structures for validated request bodies and outgoing
responses. Field-level checks on incoming data happen earlier, in
`validation.py`, so these models only coerce already-checked values.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import stored_price


# Body of POST /api/products once its rules have passed.
class ProductCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1, max_length=255, description="Name of the product.")
    price: float = Field(..., gt=0, description="Price of the product. Must be greater than 0.")

    @field_validator("price")
    @classmethod
    def round_to_cents(cls, value: float) -> float:
        """Price as the database will keep it."""
        stored = stored_price(value)
        if stored is None:
            raise ValueError("El Precio debe ser menor que 100000000")
        if stored <= 0:
            raise ValueError("El Precio debe ser mayor que 0")
        return float(stored)


# Body of PUT /api/products/{id}. PUT replaces every mutable field.
class ProductUpdate(ProductCreate):
    availability: bool = Field(..., description="Whether the product can be sold.")


# A product as returned by the API. Timestamps stay internal.
class ProductResponse(BaseModel):
    id: int = Field(..., description="Unique identifier of the product.", examples=[1])
    name: str = Field(..., description="Name of the product.", examples=["Monitor curvo de 27 pulgadas"])
    price: float = Field(..., description="Price of the product.", examples=[300])
    availability: bool = Field(..., description="Whether the product can be sold.", examples=[True])

    model_config = ConfigDict(from_attributes=True)


class ProductEnvelope(BaseModel):
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    data: List[ProductResponse]


class FieldError(BaseModel):
    """One failed constraint, in the shape clients already consume."""

    type: str = "field"
    value: Optional[Any] = None
    msg: str
    path: Optional[str] = None
    location: str

    def to_dict(self) -> dict:
        # `value` is only reported when the request actually carried one
        return {"type": self.type, **self.model_dump(exclude_unset=True)}


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]


class ErrorResponse(BaseModel):
    error: str
