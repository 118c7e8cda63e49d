from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from storefront.models import OrderStatus
from storefront.schemas.common import CamelModel
from storefront.schemas.product import ProductDetail


class ShippingAddress(CamelModel):
    cep: str = Field(..., pattern=r"^\d{8}$")
    street: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)
    complement: Optional[str] = None
    neighborhood: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=2, max_length=2)
    country: str = "BR"


class OrderItemIn(CamelModel):
    product_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)
    size: Optional[str] = None


class OrderCreate(CamelModel):
    user_id: Optional[int] = None
    items: List[OrderItemIn] = Field(..., min_length=1)
    shipping_address: ShippingAddress
    payment_method: str = Field(..., min_length=1)


class OrderUpdate(CamelModel):
    status: Optional[OrderStatus] = None
    shipping_address: Optional[ShippingAddress] = None


class OrderFilters(CamelModel):
    status: Optional[OrderStatus] = None
    user_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    page: int = 1
    limit: int = 10


class OrderCreated(CamelModel):
    message: str
    order_id: int


class OrderUserOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    cpf: Optional[str] = None
    phone: Optional[str] = None


class OrderOut(CamelModel):
    id: int
    user_id: Optional[int] = None
    total: Decimal
    status: OrderStatus
    shipping_address: ShippingAddress
    payment_method: str
    created_at: datetime
    updated_at: datetime


class OrderItemOut(CamelModel):
    id: int
    order_id: int
    product_id: int
    price: Decimal
    quantity: int
    size: Optional[str] = None
    product: ProductDetail


class OrderDetail(OrderOut):
    user: Optional[OrderUserOut] = None
    items: List[OrderItemOut]
