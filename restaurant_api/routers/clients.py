# restaurant_api/routers/clients.py

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from restaurant_api.core.rate_limiter import limiter
from restaurant_api.database import get_db
from restaurant_api.schemas.client import ClientCreate, ClientResponse
from restaurant_api.services import accounts

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post(
    "/register",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit("5/minute")
def register_client(
    request: Request,
    client_data: ClientCreate,
    db: Session = Depends(get_db),
):
    return accounts.register_client(db, client_data)
