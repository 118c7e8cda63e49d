import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from storefront.core.exceptions import Forbidden, NotFound, OrderConflict, ValidationError
from storefront.db.session import transaction
from storefront.models import Order, OrderItem, OrderStatus, Product, User
from storefront.schemas.common import paginate
from storefront.schemas.order import OrderCreate, OrderFilters, OrderUpdate

logger = logging.getLogger(__name__)

# statuses an order can no longer be cancelled from
NOT_CANCELLABLE = {
    OrderStatus.CANCELLED: "Order is already cancelled",
    OrderStatus.DELIVERED: "A delivered order cannot be cancelled",
}


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # naive bounds are taken as UTC; created_at is always stored in UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def _detail_options():
    return (
        selectinload(Order.user),
        selectinload(Order.items).selectinload(OrderItem.product).selectinload(Product.category),
    )


def list_orders(db: Session, filters: OrderFilters, requesting_user_id: int, is_admin: bool) -> dict:
    query = select(Order)
    if not is_admin:
        # regular users only ever see their own orders, whatever userId they ask for
        query = query.where(Order.user_id == requesting_user_id)
    elif filters.user_id:
        query = query.where(Order.user_id == filters.user_id)

    if filters.status:
        query = query.where(Order.status == filters.status)
    if filters.start_date:
        query = query.where(Order.created_at >= _as_utc(filters.start_date))
    if filters.end_date:
        query = query.where(Order.created_at <= _as_utc(filters.end_date))

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    orders = db.scalars(
        query.order_by(Order.created_at.desc(), Order.id.desc())
        .offset((filters.page - 1) * filters.limit)
        .limit(filters.limit)
    ).all()
    return paginate(orders, total, filters.page, filters.limit)


def _load_owned_order(db: Session, order_id: int, requesting_user_id: int, is_admin: bool, action: str) -> Order:
    order = db.scalar(select(Order).options(*_detail_options()).where(Order.id == order_id))
    if not order:
        raise NotFound("Order not found")
    if not is_admin and order.user_id != requesting_user_id:
        raise Forbidden(f"You are not allowed to {action} this order")
    return order


def get_order(db: Session, order_id: int, requesting_user_id: int, is_admin: bool) -> Order:
    return _load_owned_order(db, order_id, requesting_user_id, is_admin, "access")


def _check_line(product: Product, quantity: int, size):
    if not product.active:
        raise OrderConflict(f"Product {product.name} is inactive")
    if product.stock < quantity:
        raise OrderConflict(
            f"Insufficient stock for {product.name}. Available: {product.stock}, requested: {quantity}"
        )
    sizes = product.sizes or []
    if sizes:
        if not size:
            raise ValidationError(f"Product {product.name} requires a size selection")
        if size not in sizes:
            raise ValidationError(f"Size {size} is not available for {product.name}")


def _decrement_stock(db: Session, product: Product, quantity: int):
    # conditional decrement: a concurrent order that already took the stock makes this match no row
    result = db.execute(
        update(Product)
        .where(Product.id == product.id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise OrderConflict(f"Insufficient stock for {product.name}")


def create_order(db: Session, data: OrderCreate) -> Order:
    """Place an order: validate every line, then write it all in one transaction.

    Prices are snapshotted from the products read up front; the order total
    is always computed here, never taken from the client.
    """
    requested_ids = list(dict.fromkeys(item.product_id for item in data.items))
    products = {p.id: p for p in db.scalars(select(Product).where(Product.id.in_(requested_ids)))}

    missing = [product_id for product_id in requested_ids if product_id not in products]
    if missing:
        raise NotFound(f"Product(s) with id {', '.join(str(i) for i in missing)} not found")

    if data.user_id is not None and not db.get(User, data.user_id):
        raise NotFound("User not found")

    total = Decimal("0")
    for item in data.items:
        product = products[item.product_id]
        _check_line(product, item.quantity, item.size)
        total += Decimal(product.price) * item.quantity

    order = Order(
        user_id=data.user_id,
        total=total,
        status=OrderStatus.PENDING,
        shipping_address=data.shipping_address.model_dump(),
        payment_method=data.payment_method,
    )
    with transaction(db):
        db.add(order)
        for item in data.items:
            product = products[item.product_id]
            order.items.append(
                OrderItem(
                    product_id=product.id,
                    price=product.price,
                    quantity=item.quantity,
                    size=item.size if product.sizes else None,
                )
            )
            _decrement_stock(db, product, item.quantity)

    logger.info(f"Order {order.id} placed: {len(data.items)} line(s), total {total}")
    return order


def update_order(db: Session, order_id: int, data: OrderUpdate, requesting_user_id: int, is_admin: bool) -> Order:
    # any status may follow any status; only enum membership is checked
    order = _load_owned_order(db, order_id, requesting_user_id, is_admin, "update")
    with transaction(db):
        if data.status is not None:
            order.status = data.status
        if data.shipping_address is not None:
            order.shipping_address = data.shipping_address.model_dump()
    return get_order(db, order_id, requesting_user_id, is_admin)


def cancel_order(db: Session, order_id: int, requesting_user_id: int, is_admin: bool) -> Order:
    """Mark an order CANCELLED. Stock taken by the order is not given back."""
    order = _load_owned_order(db, order_id, requesting_user_id, is_admin, "cancel")
    if order.status in NOT_CANCELLABLE:
        raise OrderConflict(NOT_CANCELLABLE[order.status])
    with transaction(db):
        order.status = OrderStatus.CANCELLED
    logger.info(f"Order {order_id} cancelled")
    return order
