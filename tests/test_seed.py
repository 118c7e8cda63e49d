from sqlalchemy import func, select

from storefront.core.config import Settings
from storefront.models import Category, Product, Role, User
from storefront.seed import CATEGORIES, PRODUCTS, seed_admin, seed_catalog


def test_seed_catalog_is_idempotent(db):
    first = seed_catalog(db)
    second = seed_catalog(db)

    assert first == len(CATEGORIES) + len(PRODUCTS)
    assert second == 0
    assert db.scalar(select(func.count()).select_from(Category)) == len(CATEGORIES)
    tee = db.scalar(select(Product).where(Product.slug == "classic-tee"))
    assert tee.category.slug == "camisetas"


def test_seed_admin_creates_hashed_admin_once(db):
    settings = Settings(BCRYPT_ROUNDS=4)

    admin = seed_admin(db, settings, "admin@example.com", "secret123")
    again = seed_admin(db, settings, "admin@example.com", "secret123")

    assert again is None
    stored = db.scalar(select(User).where(User.email == "admin@example.com"))
    assert stored.id == admin.id
    assert stored.role == Role.ADMIN
    assert stored.password != "secret123"


def test_seed_admin_skipped_without_credentials(db):
    assert seed_admin(db, Settings(), None, None) is None
