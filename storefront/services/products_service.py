import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from storefront.core.exceptions import Conflict, NotFound
from storefront.db.session import transaction
from storefront.models import Category, Product
from storefront.schemas.common import paginate
from storefront.schemas.product import ProductCreate, ProductFilters, ProductUpdate
from storefront.utils.slug import generate_slug

logger = logging.getLogger(__name__)

SLUG_TAKEN = "Slug already exists. Choose another name for the product."

SORT_COLUMNS = {
    "price": Product.price,
    "name": Product.name,
    "createdAt": Product.created_at,
}


def list_products(db: Session, filters: ProductFilters) -> dict:
    # inactive products are listed too; callers filter on ``active`` if they need to
    query = select(Product)
    if filters.category_id:
        query = query.where(Product.category_id == filters.category_id)
    if filters.min_price is not None:
        query = query.where(Product.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.where(Product.price <= filters.max_price)
    if filters.search and filters.search.strip():
        term = filters.search.strip()
        query = query.where(
            or_(Product.name.icontains(term, autoescape=True), Product.description.icontains(term, autoescape=True))
        )

    total = db.scalar(select(func.count()).select_from(query.subquery()))

    if filters.sort_by:
        column = SORT_COLUMNS[filters.sort_by.value]
        descending = filters.sort_order is not None and filters.sort_order.value == "desc"
        query = query.order_by(column.desc() if descending else column.asc(), Product.id.asc())
    else:
        query = query.order_by(Product.id.asc())

    products = db.scalars(query.offset((filters.page - 1) * filters.limit).limit(filters.limit)).all()
    return paginate(products, total, filters.page, filters.limit)


def get_product(db: Session, product_id: int) -> Product:
    product = db.scalar(
        select(Product).options(selectinload(Product.category)).where(Product.id == product_id)
    )
    if not product:
        raise NotFound("Product not found")
    return product


def _ensure_category(db: Session, category_id: int):
    if not db.get(Category, category_id):
        raise NotFound("Category not found")


def create_product(db: Session, data: ProductCreate) -> Product:
    _ensure_category(db, data.category_id)
    slug = generate_slug(data.name)
    if db.scalar(select(Product).where(Product.slug == slug)):
        raise Conflict(SLUG_TAKEN)

    product = Product(slug=slug, **data.model_dump())
    with transaction(db):
        db.add(product)
    logger.info(f"Product {product.id} created with slug '{slug}'")
    return product


def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    product = db.get(Product, product_id)
    if not product:
        raise NotFound("Product not found")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "category_id" in changes:
        _ensure_category(db, changes["category_id"])
    if "name" in changes:
        slug = generate_slug(changes["name"])
        taken = db.scalar(select(Product).where(Product.slug == slug))
        if taken and taken.id != product.id:
            raise Conflict(SLUG_TAKEN)
        changes["slug"] = slug

    with transaction(db):
        for field, value in changes.items():
            setattr(product, field, value)
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int):
    product = db.get(Product, product_id)
    if not product:
        raise NotFound("Product not found")
    with transaction(db):
        product.active = False
    logger.info(f"Product {product_id} deactivated")
