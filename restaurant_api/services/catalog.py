# restaurant_api/services/catalog.py
#
# Product catalog scoped to an enterprise. Products are soft deleted
# through is_active and never removed, so order lines keep their product.

import logging
import uuid

from fastapi import UploadFile
from sqlalchemy.orm import Session

from restaurant_api.core.access import Principal, require_enterprise_owner
from restaurant_api.core.errors import NotFound
from restaurant_api.core.storage import save_image, validate_image
from restaurant_api.database import transaction
from restaurant_api.models.products import Product
from restaurant_api.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger("restaurant_api")


def _active_product(db: Session, enterprise_id: uuid.UUID, product_id: int):
    return (
        db.query(Product)
        .filter(
            Product.id == product_id,
            Product.enterprise_id == enterprise_id,
            Product.is_active.is_(True),
        )
        .first()
    )


def create_product(
    db: Session,
    caller: Principal,
    enterprise_id: uuid.UUID,
    data: ProductCreate,
    photo: UploadFile | None = None,
) -> Product:
    require_enterprise_owner(caller, enterprise_id)

    photo_url = None
    if photo is not None:
        photo_url = save_image(photo)

    with transaction(db):
        product = Product(
            enterprise_id=enterprise_id,
            name=data.name,
            price=data.price,
            description=data.description,
            category=data.category.value,
            photo_url=photo_url,
            is_active=True,
        )
        db.add(product)
        db.flush()
        product_id = product.id

    logger.info(f"Product {product_id} created for enterprise {enterprise_id}")

    db.refresh(product)
    return product


def update_product(
    db: Session,
    caller: Principal,
    enterprise_id: uuid.UUID,
    product_id: int,
    patch: ProductUpdate,
    photo: UploadFile | None = None,
) -> Product:
    require_enterprise_owner(caller, enterprise_id)

    if photo is not None:
        validate_image(photo)

    product = _active_product(db, enterprise_id, product_id)
    if not product:
        raise NotFound("This product does not exist")

    changes = patch.changes()
    if "category" in changes:
        changes["category"] = changes["category"].value

    if photo is not None:
        changes["photo_url"] = save_image(photo)

    with transaction(db):
        for field, value in changes.items():
            setattr(product, field, value)

    logger.info(f"Product {product_id} updated fields={sorted(changes)}")

    db.refresh(product)
    return product


def soft_delete(
    db: Session,
    caller: Principal,
    enterprise_id: uuid.UUID,
    product_id: int,
) -> None:
    require_enterprise_owner(caller, enterprise_id)

    with transaction(db):
        product = (
            db.query(Product)
            .filter(
                Product.id == product_id,
                Product.enterprise_id == enterprise_id,
            )
            .first()
        )

        if not product:
            raise NotFound("This product does not exist")

        product.is_active = False

    logger.info(f"Product {product_id} deactivated")


def list_active_by_enterprise(db: Session, enterprise_id: uuid.UUID) -> list[Product]:
    return (
        db.query(Product)
        .filter(
            Product.enterprise_id == enterprise_id,
            Product.is_active.is_(True),
        )
        .order_by(Product.id.asc())
        .all()
    )


def get_active_by_id(
    db: Session,
    caller: Principal,
    enterprise_id: uuid.UUID,
    product_id: int,
) -> Product:
    require_enterprise_owner(caller, enterprise_id)

    product = _active_product(db, enterprise_id, product_id)
    if not product:
        raise NotFound("This product does not exist")

    return product
