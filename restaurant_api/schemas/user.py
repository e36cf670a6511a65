import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

PASSWORD_RULES = (
    "Password must contain at least 1 upper-case letter, 1 lower-case letter "
    "and 1 number or special character"
)


def check_password_strength(password: str) -> str:
    password = password.strip()

    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")

    # bcrypt only looks at the first 72 bytes
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password must be at most 72 bytes long")

    has_upper = any(char.isupper() for char in password)
    has_lower = any(char.islower() for char in password)
    has_digit_or_symbol = any(not char.isalpha() for char in password)

    if not (has_upper and has_lower and has_digit_or_symbol):
        raise ValueError(PASSWORD_RULES)

    return password


class RegisterBase(BaseModel):
    name: str = Field(..., min_length=3, description="Display name")
    email: EmailStr = Field(..., description="Login email address")
    password: str = Field(..., description="Plain password (will be hashed). Minimum 8 characters.")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Name must be at least 3 characters long")
        return value

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def _password_strength(cls, value: str) -> str:
        return check_password_strength(value)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserOut(BaseModel):
    id: uuid.UUID
    name: str
    email: EmailStr
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserOut
