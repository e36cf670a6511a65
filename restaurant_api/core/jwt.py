import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from restaurant_api.core.access import Principal, Role
from restaurant_api.core.config import settings
from restaurant_api.core.errors import InvalidCredential


def create_access_token(subject: uuid.UUID, role: Role, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(subject),
        "role": Role(role).value,
        "exp": expire,
        "type": "access",
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_access_token(token: str):
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )

        # Ensure the token type is "access"
        if payload.get("type") != "access":
            return None

        return payload

    except JWTError:
        return None


def principal_from_token(token: str | None) -> Principal:
    if not token:
        raise InvalidCredential()

    payload = decode_access_token(token)
    if payload is None:
        raise InvalidCredential()

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or not role:
        raise InvalidCredential()

    try:
        return Principal(id=uuid.UUID(subject), role=Role(role))
    except ValueError:
        raise InvalidCredential()
