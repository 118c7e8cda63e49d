from contextlib import contextmanager
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.db.session import Database
from storefront.main import create_app
from storefront.models import Category, Product, Role, User

PASSWORD = "secret123"

ADDRESS = {
    "cep": "01310100",
    "street": "Avenida Paulista",
    "number": "1000",
    "complement": "Apto 12",
    "neighborhood": "Bela Vista",
    "city": "São Paulo",
    "state": "SP",
}


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session(app, client):
    """Open a short-lived session on the app's database (tables exist once the client started)."""

    @contextmanager
    def _session():
        db = app.state.db.session()
        try:
            yield db
        finally:
            db.close()

    return _session


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email, password=PASSWORD, **extra):
    body = {"firstName": "Ana", "lastName": "Souza", "email": email, "password": password}
    body.update(extra)
    response = client.post("/auth/register", json=body)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def user(client):
    data = register(client, "ana@example.com")
    return {"id": data["user"]["id"], "token": data["token"], "headers": auth_header(data["token"])}


@pytest.fixture
def other_user(client):
    data = register(client, "bruno@example.com", firstName="Bruno")
    return {"id": data["user"]["id"], "token": data["token"], "headers": auth_header(data["token"])}


@pytest.fixture
def admin(client, session):
    data = register(client, "admin@example.com", firstName="Admin")
    with session() as db:
        db.get(User, data["user"]["id"]).role = Role.ADMIN
        db.commit()
    response = client.post("/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    token = response.json()["token"]
    return {"id": data["user"]["id"], "token": token, "headers": auth_header(token)}


@pytest.fixture
def make_category(session):
    def _make(name="Camisetas", active=True):
        from storefront.utils.slug import generate_slug

        with session() as db:
            category = Category(name=name, slug=generate_slug(name), active=active)
            db.add(category)
            db.commit()
            return category.id

    return _make


@pytest.fixture
def make_product(session, make_category):
    def _make(name="Classic Tee", price="59.90", stock=10, sizes=None, active=True, category_id=None, **extra):
        from storefront.utils.slug import generate_slug

        category_id = category_id or make_category(f"Categoria {name}")
        with session() as db:
            product = Product(
                name=name,
                slug=generate_slug(name),
                description=extra.pop("description", f"{name} description"),
                price=Decimal(price),
                colors=extra.pop("colors", []),
                images=extra.pop("images", []),
                sizes=sizes or [],
                stock=stock,
                active=active,
                category_id=category_id,
            )
            db.add(product)
            db.commit()
            return product.id

    return _make
