# =========================================================
# ORDERS ROUTER
#
# CLIENTS:
# - Place orders (appended to their open order per enterprise)
# - Read their own order history
#
# ENTERPRISES:
# - Read their orders, or a client's orders made with them
# - Move orders through preparing / closed
# =========================================================

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from restaurant_api.core.access import Principal
from restaurant_api.core.auth import (
    get_current_client,
    get_current_enterprise,
    get_current_principal,
)
from restaurant_api.core.config import settings
from restaurant_api.core.money import line_total
from restaurant_api.core.rate_limiter import limiter
from restaurant_api.database import get_db
from restaurant_api.models.orders import Order
from restaurant_api.schemas.order import (
    OrderCreate,
    OrderItemResponse,
    OrderResponse,
    OrdersPage,
    OrderStatusUpdate,
    PaginationResponse,
)
from restaurant_api.services import orders as order_service

router = APIRouter(prefix="/orders", tags=["Orders"])


def _order_to_out(order: Order) -> OrderResponse:
    items: List[OrderItemResponse] = []
    for line in order.lines:
        items.append(OrderItemResponse(
            product_id=line.product_id,
            name=line.product.name if line.product else "Removed product",
            price=line.unit_price,
            quantity=line.quantity,
            line_total=line_total(line.unit_price, line.quantity),
        ))
    return OrderResponse(
        id=order.id,
        client_id=order.client_id,
        client=order.client.name if order.client else None,
        enterprise_id=order.enterprise_id,
        status=order.status,
        total=order.total,
        created_at=order.created_at,
        items=items,
    )


def _page_to_out(page: order_service.OrderPage) -> OrdersPage:
    return OrdersPage(
        orders=[_order_to_out(order) for order in page.orders],
        pagination=PaginationResponse(
            current_page=page.window.page,
            limit=page.window.safe_limit,
            total_pages=page.total_pages,
        ),
    )


# =========================================================
# PLACE ORDER
# =========================================================
@router.post("", response_model=OrderResponse)
@limiter.limit("30/minute")
def place_order(
    request: Request,
    order_data: OrderCreate,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_client),
):
    order = order_service.place_order(db, current_user, order_data.enterprise_id, order_data.items)
    return _order_to_out(order)


# =========================================================
# ENTERPRISE ORDERS
# =========================================================
@router.get("/enterprise/{enterprise_id}", response_model=OrdersPage)
def list_enterprise_orders(
    enterprise_id: uuid.UUID,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    result = order_service.list_orders_by_enterprise(
        db, current_user, enterprise_id, page, limit, settings.ORDERS_MAX_PAGE_LIMIT
    )
    return _page_to_out(result)


# =========================================================
# CLIENT ORDERS
# =========================================================
@router.get(
    "/{client_id}",
    response_model=OrdersPage,
    response_model_exclude_none=True,
)
def list_client_orders(
    client_id: uuid.UUID,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_principal),
):
    result = order_service.list_orders_by_client(
        db, current_user, client_id, page, limit, settings.ORDERS_MAX_PAGE_LIMIT
    )
    return _page_to_out(result)


# =========================================================
# STATUS TRANSITION
# =========================================================
@router.patch("/{enterprise_id}/{order_id}", response_model=OrderResponse)
def update_order_status(
    enterprise_id: uuid.UUID,
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_enterprise),
):
    order = order_service.transition_status(db, current_user, enterprise_id, order_id, payload.status)
    return _order_to_out(order)
