import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, StrictBool, field_validator

from restaurant_api.schemas.user import RegisterBase


class AddressIn(BaseModel):
    street: str = Field(..., min_length=3)
    number: int = Field(..., gt=0)
    city: str
    state: str = Field(..., min_length=2)


class AddressOut(BaseModel):
    street: str
    number: int
    city: str
    state: str

    class Config:
        from_attributes = True


class EnterpriseCreate(RegisterBase):
    address: AddressIn


class EnterpriseResponse(BaseModel):
    id: uuid.UUID
    name: str
    email: EmailStr
    role: str
    is_open: bool
    opening_hours: str | None
    logo_url: str | None
    address: AddressOut
    created_at: datetime

    class Config:
        from_attributes = True


class EnterprisePublic(BaseModel):
    id: uuid.UUID
    name: str
    role: str
    is_open: bool
    opening_hours: str | None
    logo_url: str | None
    address: AddressOut

    class Config:
        from_attributes = True


class OpenStatusUpdate(BaseModel):
    is_open: StrictBool


class OpeningHoursUpdate(BaseModel):
    opening_hours: str

    @field_validator("opening_hours")
    @classmethod
    def _check_length(cls, value: str) -> str:
        value = value.strip()
        if not 1 <= len(value) <= 85:
            raise ValueError("Opening hours must have between 1 and 85 characters")
        return value
