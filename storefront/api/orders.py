from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.api.deps import Claims, get_current_claims
from storefront.db.session import get_db
from storefront.models import OrderStatus
from storefront.schemas.common import Message, Page
from storefront.schemas.order import OrderCreate, OrderCreated, OrderDetail, OrderFilters, OrderOut, OrderUpdate
from storefront.services import orders_service

router = APIRouter()


def order_filters(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    status: Optional[OrderStatus] = None,
    user_id: Optional[int] = Query(None, alias="userId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
) -> OrderFilters:
    return OrderFilters(
        page=page,
        limit=limit,
        status=status,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("", response_model=Page[OrderOut])
def list_orders(
    filters: OrderFilters = Depends(order_filters),
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    return orders_service.list_orders(db, filters, claims.user_id, claims.is_admin)


@router.get("/{order_id}", response_model=OrderDetail)
def get_order(order_id: int, claims: Claims = Depends(get_current_claims), db: Session = Depends(get_db)):
    return orders_service.get_order(db, order_id, claims.user_id, claims.is_admin)


@router.post("", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, claims: Claims = Depends(get_current_claims), db: Session = Depends(get_db)):
    order = orders_service.create_order(db, payload)
    return {"message": "Order created successfully", "order_id": order.id}


@router.put("/{order_id}", response_model=OrderDetail)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    return orders_service.update_order(db, order_id, payload, claims.user_id, claims.is_admin)


@router.delete("/{order_id}", response_model=Message)
def cancel_order(order_id: int, claims: Claims = Depends(get_current_claims), db: Session = Depends(get_db)):
    orders_service.cancel_order(db, order_id, claims.user_id, claims.is_admin)
    return {"message": "Order cancelled successfully"}
