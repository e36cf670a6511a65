# =========================================================
# ORDER AGGREGATE
#
# - One open order (status "created") per client/enterprise pair
# - Placing an order appends lines to the open order, or opens one
# - Line prices are captured from the catalog inside the same
#   transaction that writes them
# - order.total always equals sum(unit_price * quantity) of its lines
#
# The session is always passed in by the caller. Nothing in this
# module holds a lock of its own, serialization is the database's job
# (row lock on the open order + conditional total increment).
# =========================================================

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from restaurant_api.core.access import (
    Principal,
    Role,
    require_client_orders_access,
    require_enterprise_owner,
    require_role,
    visible_client_orders,
)
from restaurant_api.core.config import settings
from restaurant_api.core.errors import (
    Conflict,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from restaurant_api.core.money import MAX_AMOUNT, ZERO, line_total, to_money
from restaurant_api.core.pagination import MAX_LIMIT, PageWindow, paginate
from restaurant_api.database import transaction
from restaurant_api.models.order_products import OrderProduct
from restaurant_api.models.orders import Order, OrderStatus
from restaurant_api.models.products import Product

logger = logging.getLogger("restaurant_api")

# A concurrent request may open the same pair's order first
OPEN_ORDER_RETRIES = 1


@dataclass(frozen=True)
class OrderPage:
    orders: list
    window: PageWindow
    total_pages: int | None


def _validate_items(items: Sequence, max_quantity: int | None = None) -> None:
    max_quantity = settings.ORDER_MAX_ITEM_QUANTITY if max_quantity is None else max_quantity

    if not items:
        raise ValidationError("You must add at least one product")

    for item in items:
        quantity = item.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Item quantity must be a positive integer")
        if quantity > max_quantity:
            raise ValidationError(f"Item quantity above the maximum of {max_quantity}")

        product_id = item.product_id
        if isinstance(product_id, bool) or not isinstance(product_id, int) or product_id <= 0:
            raise ValidationError("Product id must be a positive integer")


def _detail_query(db: Session):
    return db.query(Order).options(
        joinedload(Order.client),
        selectinload(Order.lines).joinedload(OrderProduct.product),
    )


def get_order_detail(db: Session, order_id: uuid.UUID) -> Order:
    order = _detail_query(db).filter(Order.id == order_id).first()
    if not order:
        raise NotFound("This order does not exist")
    return order


def find_open_order(db: Session, client_id: uuid.UUID, enterprise_id: uuid.UUID, lock: bool = False):
    query = db.query(Order).filter(
        Order.client_id == client_id,
        Order.enterprise_id == enterprise_id,
        Order.status == OrderStatus.CREATED.value,
    )
    if lock:
        query = query.with_for_update().populate_existing()
    return query.first()


def _resolve_prices(db: Session, enterprise_id: uuid.UUID, items: Iterable) -> dict[int, Decimal]:
    prices = {}

    for item in items:
        if item.product_id in prices:
            continue

        product = (
            db.query(Product)
            .filter(
                Product.id == item.product_id,
                Product.enterprise_id == enterprise_id,
                Product.is_active.is_(True),
            )
            .first()
        )

        if not product:
            raise NotFound(f"product {item.product_id}")

        prices[item.product_id] = to_money(product.price)

    return prices


def _append_items(db: Session, client_id: uuid.UUID, enterprise_id: uuid.UUID, items: Sequence) -> uuid.UUID:
    prices = _resolve_prices(db, enterprise_id, items)

    order = find_open_order(db, client_id, enterprise_id, lock=True)
    opened = order is None

    if opened:
        order = Order(
            client_id=client_id,
            enterprise_id=enterprise_id,
            status=OrderStatus.CREATED.value,
            total=ZERO,
        )
        db.add(order)
        # Trips the open-order unique index if another request got here first
        db.flush()

    order_id = order.id
    previous_total = to_money(order.total)
    delta = ZERO

    for item in items:
        price = prices[item.product_id]

        db.add(
            OrderProduct(
                order_id=order_id,
                product_id=item.product_id,
                client_id=client_id,
                enterprise_id=enterprise_id,
                quantity=item.quantity,
                unit_price=price,
            )
        )

        delta += line_total(price, item.quantity)

    if previous_total + delta > MAX_AMOUNT:
        raise ValidationError("Order total too large")

    db.flush()

    # Increment in the database so the total is never computed from a stale read
    updated = (
        db.query(Order)
        .filter(
            Order.id == order_id,
            Order.status == OrderStatus.CREATED.value,
        )
        .update(
            {Order.total: Order.total + delta},
            synchronize_session=False,
        )
    )

    if updated != 1:
        raise InvalidTransition("This order is no longer open")

    logger.info(
        f"{'Opened' if opened else 'Appended to'} order {order_id} "
        f"client={client_id} enterprise={enterprise_id} "
        f"lines={len(items)} delta={delta}"
    )

    return order_id


def place_order(
    db: Session,
    caller: Principal,
    enterprise_id: uuid.UUID,
    items: Sequence,
) -> Order:
    """
    Add items to the caller's open order with an enterprise.

    Runs as one transaction: an unknown product aborts everything, no
    order is opened, no line is written and an existing total is left as
    it was. Returns the order reloaded with its lines and products.
    """
    _validate_items(items)
    require_role(caller, Role.CLIENT)

    for attempt in range(OPEN_ORDER_RETRIES + 1):
        try:
            with transaction(db):
                order_id = _append_items(db, caller.id, enterprise_id, items)
            break
        except IntegrityError:
            if attempt == OPEN_ORDER_RETRIES:
                logger.warning(
                    f"Could not open order for client={caller.id} enterprise={enterprise_id}"
                )
                raise Conflict("Another order for this enterprise is being opened, try again")
            logger.info(f"Open order race for client={caller.id}, retrying")

    return get_order_detail(db, order_id)


def transition_status(
    db: Session,
    caller: Principal,
    enterprise_id: uuid.UUID,
    order_id: uuid.UUID,
    new_status,
) -> Order:
    try:
        new_status = OrderStatus(new_status)
    except ValueError:
        raise ValidationError(f"Unknown order status: {new_status}")

    require_enterprise_owner(caller, enterprise_id)

    # "created" is only ever set when an order is opened
    if new_status == OrderStatus.CREATED:
        raise InvalidTransition("You cannot open an order that has already been opened or closed.")

    with transaction(db):
        order = (
            db.query(Order)
            .filter(
                Order.id == order_id,
                Order.enterprise_id == enterprise_id,
            )
            .with_for_update()
            .first()
        )

        if not order:
            raise NotFound("This order does not exist")

        if order.status == new_status.value:
            raise InvalidTransition("The status is already this")

        if order.status == OrderStatus.CLOSED.value:
            raise InvalidTransition("It is not possible modify a closed order")

        previous = order.status
        order.status = new_status.value

    logger.info(f"Order {order_id} status {previous} -> {new_status.value}")

    return get_order_detail(db, order_id)


def list_orders_by_client(
    db: Session,
    caller: Principal,
    client_id: uuid.UUID,
    page=None,
    limit=None,
    max_limit: int = MAX_LIMIT,
) -> OrderPage:
    window = paginate(page, limit, max_limit)
    require_client_orders_access(caller, client_id)

    total_count = (
        db.query(func.count(Order.id))
        .filter(Order.client_id == client_id)
        .scalar()
    )

    orders = (
        _detail_query(db)
        .filter(Order.client_id == client_id)
        .order_by(Order.created_at.desc(), Order.id)
        .offset(window.offset)
        .limit(window.safe_limit)
        .all()
    )

    if caller.role == Role.ENTERPRISE:
        # Filtered after the page is fetched, so the page count would lie
        return OrderPage(orders=visible_client_orders(caller, orders), window=window, total_pages=None)

    return OrderPage(orders=orders, window=window, total_pages=window.total_pages(total_count))


def list_orders_by_enterprise(
    db: Session,
    caller: Principal,
    enterprise_id: uuid.UUID,
    page=None,
    limit=None,
    max_limit: int = MAX_LIMIT,
) -> OrderPage:
    window = paginate(page, limit, max_limit)
    require_enterprise_owner(caller, enterprise_id)

    total_count = (
        db.query(func.count(Order.id))
        .filter(Order.enterprise_id == enterprise_id)
        .scalar()
    )

    orders = (
        _detail_query(db)
        .filter(Order.enterprise_id == enterprise_id)
        .order_by(Order.created_at.desc(), Order.id)
        .offset(window.offset)
        .limit(window.safe_limit)
        .all()
    )

    return OrderPage(orders=orders, window=window, total_pages=window.total_pages(total_count))


def lines_total(order: Order) -> Decimal:
    total = ZERO
    for line in order.lines:
        total += line_total(line.unit_price, line.quantity)
    return total
