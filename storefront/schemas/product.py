from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field

from storefront.schemas.category import CategoryOut
from storefront.schemas.common import CamelModel


class ProductSortBy(str, Enum):
    price = "price"
    name = "name"
    createdAt = "createdAt"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    colors: List[str] = []
    images: List[str] = []
    sizes: List[str] = []
    stock: int = Field(..., ge=0)
    active: bool = True
    category_id: int = Field(..., ge=1)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    colors: Optional[List[str]] = None
    images: Optional[List[str]] = None
    sizes: Optional[List[str]] = None
    stock: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None
    category_id: Optional[int] = Field(None, ge=1)


class ProductFilters(CamelModel):
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    search: Optional[str] = None
    category_id: Optional[int] = None
    sort_by: Optional[ProductSortBy] = None
    sort_order: Optional[SortOrder] = None
    page: int = 1
    limit: int = 10


class ProductOut(CamelModel):
    id: int
    name: str
    slug: str
    description: str
    price: Decimal
    colors: List[str]
    images: List[str]
    sizes: List[str]
    stock: int
    active: bool
    category_id: int
    created_at: datetime
    updated_at: datetime


class ProductDetail(ProductOut):
    category: CategoryOut
