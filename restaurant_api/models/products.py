# restaurant_api/models/products.py

import enum

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from restaurant_api.database import Base


class ProductCategory(str, enum.Enum):
    FOOD = "food"
    DRINK = "drink"
    DESSERT = "dessert"
    COMBO = "combo"


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    enterprise_id = Column(Uuid, ForeignKey("enterprises.id"), nullable=False)

    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False)
    photo_url = Column(String, nullable=True)

    # Soft delete flag, products are never removed
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    enterprise = relationship("Enterprise", back_populates="products")

    __table_args__ = (
        Index("ix_products_enterprise_active", "enterprise_id", "is_active"),
        CheckConstraint("price > 0", name="ck_product_price_positive"),
        CheckConstraint(
            "category IN ('food', 'drink', 'dessert', 'combo')",
            name="ck_product_category_valid",
        ),
    )
