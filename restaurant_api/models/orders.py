# restaurant_api/models/orders.py

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Numeric, String, Uuid, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from restaurant_api.database import Base


class OrderStatus(str, enum.Enum):
    CREATED = "created"
    PREPARING = "preparing"
    CLOSED = "closed"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    client_id = Column(Uuid, ForeignKey("clients.id"), nullable=False, index=True)
    enterprise_id = Column(Uuid, ForeignKey("enterprises.id"), nullable=False, index=True)

    status = Column(String, nullable=False, default=OrderStatus.CREATED.value)

    # Redundant copy of sum(unit_price * quantity) over the order lines
    total = Column(Numeric(10, 2), nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    client = relationship("Client", back_populates="orders")
    lines = relationship(
        "OrderProduct",
        back_populates="order",
        order_by="OrderProduct.id",
    )

    __table_args__ = (
        # At most one open order per (client, enterprise)
        Index(
            "uq_orders_open_per_client_enterprise",
            "client_id",
            "enterprise_id",
            unique=True,
            postgresql_where=text("status = 'created'"),
            sqlite_where=text("status = 'created'"),
        ),
        Index("ix_orders_enterprise_created", "enterprise_id", "created_at"),
        CheckConstraint(
            "status IN ('created', 'preparing', 'closed')",
            name="ck_order_status_valid",
        ),
        CheckConstraint("total >= 0", name="ck_order_total_non_negative"),
    )
