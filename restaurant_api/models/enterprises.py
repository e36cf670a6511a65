# restaurant_api/models/enterprises.py

import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from restaurant_api.database import Base


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    street = Column(String, nullable=False)
    number = Column(Integer, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)

    __table_args__ = (
        CheckConstraint("number > 0", name="ck_address_number_positive"),
    )


class Enterprise(Base):
    __tablename__ = "enterprises"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="enterprise")

    # Storefront profile
    is_open = Column(Boolean, default=False, nullable=False)
    opening_hours = Column(String(85), nullable=True)
    logo_url = Column(String, nullable=True)

    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    address = relationship("Address", lazy="joined")
    products = relationship("Product", back_populates="enterprise")
