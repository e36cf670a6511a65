# restaurant_api/routers/enterprises.py

import uuid

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.orm import Session

from restaurant_api.core.access import Principal
from restaurant_api.core.auth import get_current_enterprise
from restaurant_api.core.rate_limiter import limiter
from restaurant_api.database import get_db
from restaurant_api.routers.forms import parse_json_form
from restaurant_api.schemas.enterprise import (
    EnterpriseCreate,
    EnterprisePublic,
    EnterpriseResponse,
    OpeningHoursUpdate,
    OpenStatusUpdate,
)
from restaurant_api.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductWithEnterpriseResponse,
)
from restaurant_api.services import accounts, catalog

router = APIRouter(prefix="/enterprises", tags=["Enterprises"])


# =========================================================
# PUBLIC
# =========================================================
@router.post(
    "/register",
    response_model=EnterpriseResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit("5/minute")
def register_enterprise(
    request: Request,
    enterprise_data: EnterpriseCreate,
    db: Session = Depends(get_db),
):
    return accounts.register_enterprise(db, enterprise_data)


@router.get("", response_model=list[EnterprisePublic])
def list_enterprises(
    name: str = "",
    db: Session = Depends(get_db),
):
    return accounts.list_enterprises(db, name)


@router.get("/{enterprise_id}", response_model=EnterprisePublic)
def get_enterprise(
    enterprise_id: uuid.UUID,
    db: Session = Depends(get_db),
):
    return accounts.get_enterprise(db, enterprise_id)


# =========================================================
# OWNER ONLY
# =========================================================
@router.post(
    "/{enterprise_id}/products",
    response_model=ProductWithEnterpriseResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    enterprise_id: uuid.UUID,
    data: str = Form(...),
    photo: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    product_data = parse_json_form(ProductCreate, data)

    product = catalog.create_product(db, current_user, enterprise_id, product_data, photo)

    return ProductWithEnterpriseResponse(
        **ProductResponse.model_validate(product).model_dump(),
        enterprise_name=product.enterprise.name,
    )


@router.patch("/{enterprise_id}/is-open", response_model=EnterprisePublic)
def update_open_status(
    enterprise_id: uuid.UUID,
    payload: OpenStatusUpdate,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    return accounts.update_open_status(db, current_user, enterprise_id, payload.is_open)


@router.patch("/{enterprise_id}/opening-hours")
def update_opening_hours(
    enterprise_id: uuid.UUID,
    payload: OpeningHoursUpdate,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    opening_hours = accounts.update_opening_hours(db, current_user, enterprise_id, payload.opening_hours)
    return {"opening_hours": opening_hours}


@router.patch("/{enterprise_id}/logo")
def update_logo(
    enterprise_id: uuid.UUID,
    photo: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    filename = accounts.update_logo(db, current_user, enterprise_id, photo)
    return {"logo_url": filename}
