from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.db.session import get_db
from storefront.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from storefront.schemas.common import Message, Page
from storefront.services import categories_service

router = APIRouter()


@router.get("", response_model=Page[CategoryOut])
def list_categories(
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db),
):
    return categories_service.list_categories(db, search=search, page=page, limit=limit)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return categories_service.get_category(db, category_id)


@router.post(
    "",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    categories_service.create_category(db, payload)
    return {"message": "Category created successfully"}


@router.put("/{category_id}", response_model=CategoryOut, dependencies=[Depends(require_admin)])
def update_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)):
    return categories_service.update_category(db, category_id, payload)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_admin)],
)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    categories_service.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
