"""Fill an empty store with the default catalog and an admin account.

Run with ``python -m storefront.seed``. Set ``ADMIN_EMAIL`` and
``ADMIN_PASSWORD`` to also create an administrator; this is the only way
an ADMIN comes into existence, the HTTP API never grants the role.
"""
import logging
import os
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.config import Settings, get_settings
from storefront.core.log import configure_logging
from storefront.core.security import hasher_from_settings
from storefront.db.session import Database, transaction
from storefront.models import Category, Product, Role, User
from storefront.utils.slug import generate_slug

logger = logging.getLogger(__name__)

CATEGORIES = [
    {"name": "Camisetas", "description": "Camisetas casuais e confortáveis para o dia a dia"},
    {"name": "Moletons", "description": "Moletons quentes e estilosos"},
    {"name": "Calças", "description": "Calças e jeans para todas as ocasiões"},
    {"name": "Shorts", "description": "Shorts esportivos e casuais"},
    {"name": "Acessórios", "description": "Cintos, bonés, mochilas e mais"},
    {"name": "Vestidos", "description": "Vestidos para diversas ocasiões"},
    {"name": "Calçados", "description": "Tênis, sapatos e sandálias"},
    {"name": "Meias", "description": "Meias confortáveis em diversos estilos"},
]

PRODUCTS = [
    {
        "name": "Classic Tee",
        "description": "Camiseta clássica, confortável e versátil.",
        "price": Decimal("59.90"),
        "colors": ["Preto", "Branco", "Cinza"],
        "sizes": ["P", "M", "G", "GG"],
        "stock": 100,
        "category": "Camisetas",
    },
    {
        "name": "Hoodie Essential",
        "description": "Moletom com capuz em algodão felpado.",
        "price": Decimal("189.90"),
        "colors": ["Preto", "Azul Marinho"],
        "sizes": ["P", "M", "G"],
        "stock": 40,
        "category": "Moletons",
    },
    {
        "name": "Jeans Slim",
        "description": "Calça jeans de corte slim com elastano.",
        "price": Decimal("229.90"),
        "colors": ["Azul"],
        "sizes": ["38", "40", "42", "44"],
        "stock": 60,
        "category": "Calças",
    },
    {
        "name": "Boné Aba Curva",
        "description": "Boné ajustável com aba curva.",
        "price": Decimal("79.90"),
        "colors": ["Preto", "Bege"],
        "sizes": [],
        "stock": 80,
        "category": "Acessórios",
    },
    {
        "name": "Meia Cano Alto",
        "description": "Kit com três pares de meias cano alto.",
        "price": Decimal("39.90"),
        "colors": ["Branco"],
        "sizes": [],
        "stock": 150,
        "category": "Meias",
    },
]


def seed_catalog(db: Session) -> int:
    created = 0
    categories = {}
    with transaction(db):
        for entry in CATEGORIES:
            slug = generate_slug(entry["name"])
            category = db.scalar(select(Category).where(Category.slug == slug))
            if category is None:
                category = Category(slug=slug, active=True, **entry)
                db.add(category)
                created += 1
            categories[entry["name"]] = category
        db.flush()

        for entry in PRODUCTS:
            data = dict(entry)
            category = categories[data.pop("category")]
            slug = generate_slug(data["name"])
            if db.scalar(select(Product).where(Product.slug == slug)):
                continue
            db.add(Product(slug=slug, category_id=category.id, images=[], active=True, **data))
            created += 1
    return created


def seed_admin(db: Session, settings: Settings, email: Optional[str], password: Optional[str]) -> Optional[User]:
    if not email or not password:
        return None
    if db.scalar(select(User).where(User.email == email)):
        logger.info(f"Admin {email} already exists, skipping")
        return None
    admin = User(
        first_name="Admin",
        last_name="Syntax Wear",
        email=email,
        password=hasher_from_settings(settings).hash(password),
        role=Role.ADMIN,
    )
    with transaction(db):
        db.add(admin)
    return admin


def run(settings: Optional[Settings] = None):
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL)
    database.create_all()
    db = database.session()
    try:
        created = seed_catalog(db)
        logger.info(f"Catalog seeded: {created} new record(s)")
        admin = seed_admin(db, settings, os.getenv("ADMIN_EMAIL"), os.getenv("ADMIN_PASSWORD"))
        if admin:
            logger.info(f"Admin account {admin.email} created")
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    run()
