from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.db.session import get_db
from storefront.schemas.common import Message, Page
from storefront.schemas.product import (
    ProductCreate,
    ProductDetail,
    ProductFilters,
    ProductOut,
    ProductSortBy,
    ProductUpdate,
    SortOrder,
)
from storefront.services import products_service

router = APIRouter()


def product_filters(
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    search: Optional[str] = None,
    category_id: Optional[int] = Query(None, alias="categoryId"),
    sort_by: Optional[ProductSortBy] = Query(None, alias="sortBy"),
    sort_order: Optional[SortOrder] = Query(None, alias="sortOrder"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
) -> ProductFilters:
    return ProductFilters(
        min_price=min_price,
        max_price=max_price,
        search=search,
        category_id=category_id,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )


@router.get("", response_model=Page[ProductOut])
def list_products(filters: ProductFilters = Depends(product_filters), db: Session = Depends(get_db)):
    return products_service.list_products(db, filters)


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return products_service.get_product(db, product_id)


@router.post(
    "",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    products_service.create_product(db, payload)
    return {"message": "Product created successfully"}


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    return products_service.update_product(db, product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_admin)],
)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    products_service.delete_product(db, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
