# restaurant_api/models/order_products.py

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, Uuid
from sqlalchemy.orm import relationship

from restaurant_api.database import Base


class OrderProduct(Base):
    __tablename__ = "order_products"

    id = Column(Integer, primary_key=True, index=True)

    order_id = Column(Uuid, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    client_id = Column(Uuid, ForeignKey("clients.id"), nullable=False)
    enterprise_id = Column(Uuid, ForeignKey("enterprises.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    # Product price captured when the line was added
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="lines")
    product = relationship("Product")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_product_quantity_positive"),
        CheckConstraint("unit_price > 0", name="ck_order_product_price_positive"),
    )
