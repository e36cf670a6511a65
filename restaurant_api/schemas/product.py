import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from restaurant_api.models.products import ProductCategory


def _clean_text(value: str) -> str:
    value = value.strip()
    if len(value) < 3:
        raise ValueError("Must be at least 3 characters long")
    return value


class ProductCreate(BaseModel):
    name: str
    price: Decimal = Field(
        ...,
        gt=0,
        lt=100_000_000,
        max_digits=10,
        decimal_places=2,
        description="Unit price, two decimal places",
    )
    description: str
    category: ProductCategory

    @field_validator("name", "description")
    @classmethod
    def _min_length(cls, value: str) -> str:
        return _clean_text(value)


class ProductUpdate(BaseModel):
    """
    Partial update.

    Keys left out of the payload keep their stored value. Sending an
    explicit null is rejected, none of these columns are nullable.
    """

    name: str | None = None
    price: Decimal | None = Field(
        None,
        gt=0,
        lt=100_000_000,
        max_digits=10,
        decimal_places=2,
    )
    description: str | None = None
    category: ProductCategory | None = None

    @field_validator("name", "price", "description", "category", mode="before")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null, leave it out to keep the current value")
        return value

    @field_validator("name", "description")
    @classmethod
    def _min_length(cls, value: str) -> str:
        return _clean_text(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ProductResponse(BaseModel):
    id: int
    enterprise_id: uuid.UUID
    name: str
    price: Decimal
    description: str
    category: ProductCategory
    photo_url: str | None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ProductWithEnterpriseResponse(ProductResponse):
    enterprise_name: str
