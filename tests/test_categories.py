import pytest
from sqlalchemy import select

from storefront.models import Category, Product


def test_admin_creates_category_with_derived_slug(client, admin, session):
    response = client.post(
        "/categories",
        json={"name": "Calças Jeans", "description": "Jeans para todas as ocasiões"},
        headers=admin["headers"],
    )

    assert response.status_code == 201
    assert response.json() == {"message": "Category created successfully"}
    with session() as db:
        category = db.scalar(select(Category).where(Category.name == "Calças Jeans"))
        assert category.slug == "calcas-jeans"
        assert category.active is True


def test_create_category_twice_is_slug_conflict(client, admin):
    first = client.post("/categories", json={"name": "Moletons"}, headers=admin["headers"])
    second = client.post("/categories", json={"name": "moletons"}, headers=admin["headers"])

    assert first.status_code == 201
    assert second.status_code == 409


def test_create_category_requires_authentication(client):
    response = client.post("/categories", json={"name": "Moletons"})
    assert response.status_code == 401


def test_create_category_requires_admin(client, user):
    response = client.post("/categories", json={"name": "Moletons"}, headers=user["headers"])
    assert response.status_code == 403


def test_create_category_without_name(client, admin):
    response = client.post("/categories", json={"description": "sem nome"}, headers=admin["headers"])
    assert response.status_code == 400


def test_list_is_public_paginated_and_sorted(client, make_category):
    for name in ["Shorts", "Acessórios", "Meias"]:
        make_category(name)

    response = client.get("/categories", params={"page": 1, "limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert [c["name"] for c in body["data"]] == ["Acessórios", "Meias"]
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 2
    assert body["totalPages"] == 2


def test_list_search_is_case_insensitive(client, make_category):
    make_category("Camisetas")
    make_category("Vestidos")

    response = client.get("/categories", params={"search": "CAMI"})

    assert [c["name"] for c in response.json()["data"]] == ["Camisetas"]


@pytest.mark.parametrize("term", ["%", "_"])
def test_list_search_treats_wildcards_literally(client, make_category, term):
    make_category("Camisetas")
    make_category("Moletons")
    make_category("Promo 50%_off")

    response = client.get("/categories", params={"search": term})

    assert [c["name"] for c in response.json()["data"]] == ["Promo 50%_off"]


def test_list_hides_inactive_categories(client, make_category):
    make_category("Camisetas")
    make_category("Antigas", active=False)

    names = [c["name"] for c in client.get("/categories").json()["data"]]

    assert names == ["Camisetas"]


def test_list_rejects_invalid_page(client):
    assert client.get("/categories", params={"page": 0}).status_code == 400


def test_get_category_by_id(client, make_category):
    category_id = make_category("Camisetas")

    response = client.get(f"/categories/{category_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["slug"] == "camisetas"
    assert "createdAt" in body


def test_get_missing_category(client):
    assert client.get("/categories/999").status_code == 404


def test_get_still_returns_soft_deleted_category(client, admin, make_category):
    category_id = make_category("Camisetas")
    client.delete(f"/categories/{category_id}", headers=admin["headers"])

    response = client.get(f"/categories/{category_id}")

    assert response.status_code == 200
    assert response.json()["active"] is False


def test_update_category_rederives_slug(client, admin, make_category):
    category_id = make_category("Camisetas")

    response = client.put(
        f"/categories/{category_id}",
        json={"name": "Camisetas Básicas"},
        headers=admin["headers"],
    )

    assert response.status_code == 200
    assert response.json()["slug"] == "camisetas-basicas"


def test_update_category_keeps_unsent_fields(client, admin, session, make_category):
    category_id = make_category("Camisetas")
    client.put(f"/categories/{category_id}", json={"description": "Algodão"}, headers=admin["headers"])

    response = client.put(f"/categories/{category_id}", json={"active": False}, headers=admin["headers"])

    body = response.json()
    assert body["description"] == "Algodão"
    assert body["active"] is False
    assert body["name"] == "Camisetas"


def test_update_category_slug_collision(client, admin, make_category):
    make_category("Camisetas")
    other_id = make_category("Moletons")

    response = client.put(f"/categories/{other_id}", json={"name": "Camisetas"}, headers=admin["headers"])

    assert response.status_code == 409


def test_update_category_same_name_is_not_a_collision(client, admin, make_category):
    category_id = make_category("Camisetas")

    response = client.put(f"/categories/{category_id}", json={"name": "Camisetas"}, headers=admin["headers"])

    assert response.status_code == 200


def test_update_missing_category(client, admin):
    response = client.put("/categories/999", json={"name": "Nada"}, headers=admin["headers"])
    assert response.status_code == 404


def test_delete_cascades_to_products(client, admin, session, make_category, make_product):
    category_id = make_category("Camisetas")
    other_id = make_category("Moletons")
    make_product("Classic Tee", category_id=category_id)
    make_product("Oversized Tee", category_id=category_id)
    untouched = make_product("Hoodie", category_id=other_id)

    response = client.delete(f"/categories/{category_id}", headers=admin["headers"])

    assert response.status_code == 204
    assert response.content == b""
    with session() as db:
        assert db.get(Category, category_id).active is False
        products = db.scalars(select(Product).where(Product.category_id == category_id)).all()
        assert len(products) == 2
        assert all(p.active is False for p in products)
        assert db.get(Product, untouched).active is True


def test_delete_missing_category(client, admin):
    assert client.delete("/categories/999", headers=admin["headers"]).status_code == 404


def test_delete_requires_admin(client, user, make_category):
    category_id = make_category("Camisetas")
    assert client.delete(f"/categories/{category_id}", headers=user["headers"]).status_code == 403
    assert client.delete(f"/categories/{category_id}").status_code == 401
