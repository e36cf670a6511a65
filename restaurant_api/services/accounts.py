# restaurant_api/services/accounts.py
#
# Client and enterprise accounts: registration, login and the
# enterprise storefront profile.

import logging
import uuid

from fastapi import UploadFile
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from restaurant_api.core.access import Principal, Role, require_enterprise_owner
from restaurant_api.core.errors import Conflict, InvalidCredential, NotFound
from restaurant_api.core.hashing import hash_password, verify_password
from restaurant_api.core.jwt import create_access_token
from restaurant_api.core.storage import save_image
from restaurant_api.database import transaction
from restaurant_api.models.clients import Client
from restaurant_api.models.enterprises import Address, Enterprise
from restaurant_api.schemas.client import ClientCreate
from restaurant_api.schemas.enterprise import EnterpriseCreate

logger = logging.getLogger("restaurant_api")

ACCOUNT_MODELS = {
    Role.CLIENT: Client,
    Role.ENTERPRISE: Enterprise,
}


def _email_taken(db: Session, model, email: str) -> bool:
    return (
        db.query(model.id)
        .filter(func.lower(model.email) == email.lower())
        .first()
        is not None
    )


def register_client(db: Session, data: ClientCreate) -> Client:
    if _email_taken(db, Client, data.email):
        raise Conflict("User already exists")

    client = Client(
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=Role.CLIENT.value,
    )

    try:
        with transaction(db):
            db.add(client)
    except IntegrityError:
        raise Conflict("User already exists")

    logger.info(f"Client registered id={client.id}")

    db.refresh(client)
    return client


def register_enterprise(db: Session, data: EnterpriseCreate) -> Enterprise:
    if _email_taken(db, Enterprise, data.email):
        raise Conflict("User already exists")

    try:
        with transaction(db):
            address = Address(**data.address.model_dump())
            db.add(address)
            db.flush()

            enterprise = Enterprise(
                name=data.name,
                email=data.email,
                password_hash=hash_password(data.password),
                role=Role.ENTERPRISE.value,
                address_id=address.id,
            )
            db.add(enterprise)
    except IntegrityError:
        raise Conflict("User already exists")

    logger.info(f"Enterprise registered id={enterprise.id}")

    db.refresh(enterprise)
    return enterprise


def login(db: Session, role: Role, email: str, password: str):
    model = ACCOUNT_MODELS[Role(role)]

    user = db.query(model).filter(func.lower(model.email) == email.lower()).first()

    # Same answer for unknown email and wrong password
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed {Role(role).value} login")
        raise InvalidCredential("Email/password is invalid!")

    token = create_access_token(user.id, Role(role))

    return token, user


def list_enterprises(db: Session, name: str = "") -> list[Enterprise]:
    query = db.query(Enterprise)

    name = (name or "").strip()
    if name:
        query = query.filter(
            func.lower(Enterprise.name).contains(name.lower(), autoescape=True)
        )

    return query.order_by(Enterprise.name.asc()).all()


def get_enterprise(db: Session, enterprise_id: uuid.UUID) -> Enterprise:
    enterprise = db.query(Enterprise).filter(Enterprise.id == enterprise_id).first()

    if not enterprise:
        raise NotFound("Enterprise not found")

    return enterprise


def _owned_enterprise(db: Session, caller: Principal, enterprise_id: uuid.UUID) -> Enterprise:
    require_enterprise_owner(caller, enterprise_id)
    return get_enterprise(db, enterprise_id)


def update_open_status(db: Session, caller: Principal, enterprise_id: uuid.UUID, is_open: bool) -> Enterprise:
    enterprise = _owned_enterprise(db, caller, enterprise_id)

    with transaction(db):
        enterprise.is_open = is_open

    logger.info(f"Enterprise {enterprise_id} is_open={is_open}")

    return enterprise


def update_opening_hours(db: Session, caller: Principal, enterprise_id: uuid.UUID, opening_hours: str) -> str:
    enterprise = _owned_enterprise(db, caller, enterprise_id)

    with transaction(db):
        enterprise.opening_hours = opening_hours

    return opening_hours


def update_logo(db: Session, caller: Principal, enterprise_id: uuid.UUID, logo: UploadFile | None) -> str:
    enterprise = _owned_enterprise(db, caller, enterprise_id)

    filename = save_image(logo)

    with transaction(db):
        enterprise.logo_url = filename

    logger.info(f"Enterprise {enterprise_id} logo updated")

    return filename
