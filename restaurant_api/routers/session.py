# restaurant_api/routers/session.py

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from restaurant_api.core.access import Role
from restaurant_api.core.rate_limiter import limiter
from restaurant_api.database import get_db
from restaurant_api.schemas.user import TokenResponse, UserLogin, UserOut
from restaurant_api.services import accounts

router = APIRouter(prefix="/session", tags=["Session"])


def _token_response(token: str, user) -> TokenResponse:
    return TokenResponse(token=token, user=UserOut.model_validate(user))


# ---------------- CLIENT LOGIN ----------------
@router.post("/client", response_model=TokenResponse)
@limiter.limit("5/minute")
def client_login(
    request: Request,
    credentials: UserLogin,
    db: Session = Depends(get_db),
):
    token, user = accounts.login(db, Role.CLIENT, credentials.email, credentials.password)
    return _token_response(token, user)


# ---------------- ENTERPRISE LOGIN ----------------
@router.post("/enterprise", response_model=TokenResponse)
@limiter.limit("5/minute")
def enterprise_login(
    request: Request,
    credentials: UserLogin,
    db: Session = Depends(get_db),
):
    token, user = accounts.login(db, Role.ENTERPRISE, credentials.email, credentials.password)
    return _token_response(token, user)
