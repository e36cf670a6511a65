import os
import tempfile
from decimal import Decimal

import pytest

# Configure the application before anything imports settings
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="restaurant-api-uploads-")

from fastapi.testclient import TestClient  # noqa: E402

from restaurant_api.core.access import Principal, Role  # noqa: E402
from restaurant_api.core.hashing import hash_password  # noqa: E402
from restaurant_api.core.jwt import create_access_token  # noqa: E402
from restaurant_api.database import Base, SessionLocal, engine  # noqa: E402
from restaurant_api.main import app  # noqa: E402
from restaurant_api.models.clients import Client  # noqa: E402
from restaurant_api.models.enterprises import Address, Enterprise  # noqa: E402
from restaurant_api.models.products import Product  # noqa: E402

PASSWORD = "Secret#123"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    return TestClient(app)


def make_client(db, name="Alice", email="alice@example.com"):
    user = Client(
        name=name,
        email=email,
        password_hash=hash_password(PASSWORD),
        role=Role.CLIENT.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_enterprise(db, name="Pasta House", email="pasta@example.com"):
    address = Address(street="Main Street", number=10, city="Springfield", state="SP")
    db.add(address)
    db.flush()
    enterprise = Enterprise(
        name=name,
        email=email,
        password_hash=hash_password(PASSWORD),
        role=Role.ENTERPRISE.value,
        address_id=address.id,
    )
    db.add(enterprise)
    db.commit()
    db.refresh(enterprise)
    return enterprise


def make_product(db, enterprise, name="Lasagna", price="10.00", is_active=True):
    product = Product(
        enterprise_id=enterprise.id,
        name=name,
        price=Decimal(price),
        description=f"House {name.lower()}",
        category="food",
        is_active=is_active,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def principal(user) -> Principal:
    return Principal(id=user.id, role=Role(user.role))


def auth_headers(user) -> dict:
    token = create_access_token(user.id, Role(user.role))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(db):
    return make_client(db)


@pytest.fixture()
def bob(db):
    return make_client(db, name="Bobby", email="bob@example.com")


@pytest.fixture()
def pasta_house(db):
    return make_enterprise(db)


@pytest.fixture()
def burger_joint(db):
    return make_enterprise(db, name="Burger Joint", email="burger@example.com")
