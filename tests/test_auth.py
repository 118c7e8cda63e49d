from sqlalchemy import select

from conftest import PASSWORD, auth_header, register
from storefront.models import Role, User


def test_register_returns_user_without_password_and_token(client):
    response = client.post(
        "/auth/register",
        json={
            "firstName": "Ana",
            "lastName": "Souza",
            "email": "ana@example.com",
            "password": PASSWORD,
            "cpf": "12345678901",
            "phone": "11999990000",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token"]
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["firstName"] == "Ana"
    assert body["user"]["role"] == "USER"
    assert "password" not in body["user"]


def test_register_stores_hash_not_plaintext(client, session):
    register(client, "ana@example.com")

    with session() as db:
        stored = db.scalar(select(User).where(User.email == "ana@example.com"))
        assert stored.password != PASSWORD
        assert stored.password.startswith("$2")
        assert stored.role == Role.USER


def test_register_duplicate_email_conflicts(client):
    register(client, "ana@example.com")
    response = client.post(
        "/auth/register",
        json={"firstName": "Ana", "lastName": "Souza", "email": "ana@example.com", "password": PASSWORD},
    )
    assert response.status_code == 409
    assert "message" in response.json()


def test_register_duplicate_cpf_conflicts(client):
    register(client, "ana@example.com", cpf="12345678901")
    response = client.post(
        "/auth/register",
        json={
            "firstName": "Bia",
            "lastName": "Lima",
            "email": "bia@example.com",
            "password": PASSWORD,
            "cpf": "12345678901",
        },
    )
    assert response.status_code == 409


def test_register_missing_fields_is_validation_error(client):
    response = client.post("/auth/register", json={"email": "ana@example.com"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation error"
    assert body["errors"]


def test_register_short_password_rejected(client):
    response = client.post(
        "/auth/register",
        json={"firstName": "Ana", "lastName": "Souza", "email": "ana@example.com", "password": "123"},
    )
    assert response.status_code == 400


def test_login_token_resolves_to_same_user(client):
    created = register(client, "ana@example.com")

    response = client.post("/auth/login", json={"email": "ana@example.com", "password": PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == created["user"]["id"]
    assert "password" not in body["user"]

    # the token authenticates the same user: their (empty) order list is scoped to them
    orders = client.get("/orders", headers=auth_header(body["token"]))
    assert orders.status_code == 200
    assert orders.json()["data"] == []


def test_login_failures_look_identical(client):
    register(client, "ana@example.com")

    wrong_password = client.post("/auth/login", json={"email": "ana@example.com", "password": "wrong-pass"})
    unknown_email = client.post("/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_login_missing_fields(client):
    response = client.post("/auth/login", json={})
    assert response.status_code == 400
