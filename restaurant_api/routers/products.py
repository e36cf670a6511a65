# restaurant_api/routers/products.py

import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from restaurant_api.core.access import Principal
from restaurant_api.core.auth import get_current_enterprise, get_current_principal
from restaurant_api.database import get_db
from restaurant_api.routers.forms import parse_json_form
from restaurant_api.schemas.product import ProductResponse, ProductUpdate
from restaurant_api.services import catalog

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.get("/{enterprise_id}", response_model=list[ProductResponse])
def list_products(
    enterprise_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_principal),
):
    return catalog.list_active_by_enterprise(db, enterprise_id)


@router.get("/{enterprise_id}/{product_id}", response_model=ProductResponse)
def get_product(
    enterprise_id: uuid.UUID,
    product_id: int,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    return catalog.get_active_by_id(db, current_user, enterprise_id, product_id)


@router.put("/{enterprise_id}/{product_id}", response_model=ProductResponse)
def update_product(
    enterprise_id: uuid.UUID,
    product_id: int,
    data: str = Form("{}"),
    photo: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    patch = parse_json_form(ProductUpdate, data)
    return catalog.update_product(db, current_user, enterprise_id, product_id, patch, photo)


# Soft delete: the product stays referenced by past orders
@router.patch("/{enterprise_id}/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    enterprise_id: uuid.UUID,
    product_id: int,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    catalog.soft_delete(db, current_user, enterprise_id, product_id)
    return None
