import uuid
from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from restaurant_api.core.config import settings
from restaurant_api.models.orders import OrderStatus


class OrderItemCreate(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0, le=settings.ORDER_MAX_ITEM_QUANTITY)


class OrderCreate(BaseModel):
    enterprise_id: uuid.UUID
    items: List[OrderItemCreate]


class OrderItemResponse(BaseModel):
    product_id: int
    name: str
    price: Decimal
    quantity: int
    line_total: Decimal


class OrderResponse(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID
    client: str | None = None
    enterprise_id: uuid.UUID
    status: OrderStatus
    total: Decimal
    created_at: datetime
    items: List[OrderItemResponse]


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class PaginationResponse(BaseModel):
    current_page: int
    limit: int
    total_pages: int | None = None


class OrdersPage(BaseModel):
    orders: List[OrderResponse]
    pagination: PaginationResponse
