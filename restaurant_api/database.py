# restaurant_api/database.py

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from restaurant_api.core.config import settings

logger = logging.getLogger("restaurant_api")


def _normalize_url(url: str) -> str:
    # Heroku/Render style URLs use the legacy scheme
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


SQLALCHEMY_DATABASE_URL = _normalize_url(settings.DATABASE_URL)

engine_kwargs = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if SQLALCHEMY_DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool
else:
    engine_kwargs["pool_pre_ping"] = True

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    Atomic unit of work over an injected session.

    Commits when the block finishes, rolls back everything written inside
    the block when any exception escapes it, then re-raises.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_db():
    # Import models so every table is registered on Base.metadata
    from restaurant_api.models import (  # noqa: F401
        clients,
        enterprises,
        order_products,
        orders,
        products,
    )

    Base.metadata.create_all(bind=engine)
