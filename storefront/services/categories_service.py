import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.core.exceptions import Conflict, NotFound
from storefront.db.session import transaction
from storefront.models import Category
from storefront.schemas.category import CategoryCreate, CategoryUpdate
from storefront.schemas.common import paginate
from storefront.utils.slug import generate_slug

logger = logging.getLogger(__name__)

SLUG_TAKEN = "Slug already exists. Choose another name for the category."


def list_categories(db: Session, search: Optional[str] = None, page: int = 1, limit: int = 10) -> dict:
    query = select(Category).where(Category.active.is_(True))
    if search and search.strip():
        query = query.where(Category.name.icontains(search.strip(), autoescape=True))

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    categories = db.scalars(
        query.order_by(Category.name.asc()).offset((page - 1) * limit).limit(limit)
    ).all()
    return paginate(categories, total, page, limit)


def get_category(db: Session, category_id: int) -> Category:
    # soft-deleted categories are still returned here, only the listing hides them
    category = db.get(Category, category_id)
    if not category:
        raise NotFound("Category not found")
    return category


def create_category(db: Session, data: CategoryCreate) -> Category:
    slug = generate_slug(data.name)
    if db.scalar(select(Category).where(Category.slug == slug)):
        raise Conflict(SLUG_TAKEN)

    category = Category(name=data.name, slug=slug, description=data.description, active=data.active)
    with transaction(db):
        db.add(category)
    logger.info(f"Category {category.id} created with slug '{slug}'")
    return category


def update_category(db: Session, category_id: int, data: CategoryUpdate) -> Category:
    category = get_category(db, category_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "name" in changes:
        slug = generate_slug(changes["name"])
        taken = db.scalar(select(Category).where(Category.slug == slug))
        if taken and taken.id != category.id:
            raise Conflict(SLUG_TAKEN)
        changes["slug"] = slug

    with transaction(db):
        for field, value in changes.items():
            setattr(category, field, value)
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int):
    category = get_category(db, category_id)
    with transaction(db):
        category.deactivate()
    logger.info(f"Category {category_id} deactivated along with its products")
