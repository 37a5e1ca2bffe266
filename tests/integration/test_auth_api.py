"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update
from sqlalchemy.orm import Session
from lms_gateway.config import settings
from lms_gateway.domain.models import Identity
from lms_gateway.domain.tokens import issue_access_token
from lms_gateway.infrastructure.database.models import Account as AccountRow

REGISTRATION = {
    "business_name": "Lender Business",
    "phone_number": "123-456-7890",
    "email": "lender@example.com",
    "interest_rate": 12.5,
    "username": "lenderuser",
    "password": "StrongPass123",
}


@pytest.fixture
def registered(client: TestClient) -> int:
    response = client.post("/v1/auth/register", json=REGISTRATION)
    assert response.status_code == 201
    return response.json()["account_id"]


@pytest.fixture
def tokens(client: TestClient, registered: int) -> dict:
    response = client.post("/v1/auth/login", json={"username": "lenderuser", "password": "StrongPass123"})
    assert response.status_code == 200
    return response.json()


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["environment"] == settings.environment


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "lms_login_total" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_register(registered: int):
    assert registered > 0


def test_register_duplicate_username(client: TestClient, registered: int):
    response = client.post("/v1/auth/register", json={**REGISTRATION, "email": "other@example.com"})
    assert response.status_code == 409


def test_register_weak_password(client: TestClient):
    response = client.post("/v1/auth/register", json={**REGISTRATION, "password": "nouppercase123"})
    assert response.status_code == 400
    assert "uppercase" in response.json()["detail"]


def test_register_interest_rate_out_of_range(client: TestClient):
    response = client.post("/v1/auth/register", json={**REGISTRATION, "interest_rate": 101})
    assert response.status_code == 422


def test_login_returns_token_pair(tokens: dict):
    assert tokens["token_type"] == "bearer"
    assert tokens["access_token"].count(".") == 2
    assert tokens["refresh_token"] != tokens["access_token"]


def test_login_wrong_password(client: TestClient, registered: int):
    response = client.post("/v1/auth/login", json={"username": "lenderuser", "password": "WrongPass123"})
    assert response.status_code == 401


def test_login_unknown_user_looks_like_wrong_password(client: TestClient):
    response = client.post("/v1/auth/login", json={"username": "nobody", "password": "StrongPass123"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"


def test_login_locked_account(client: TestClient, db: Session, registered: int):
    db.execute(update(AccountRow).where(AccountRow.id == registered).values(is_locked=True))
    db.commit()

    response = client.post("/v1/auth/login", json={"username": "lenderuser", "password": "StrongPass123"})
    assert response.status_code == 403


def test_me(client: TestClient, registered: int, tokens: dict):
    response = client.get("/v1/auth/me", headers=_bearer(tokens["access_token"]))

    assert response.status_code == 200
    data = response.json()
    assert data["account_id"] == registered
    assert data["username"] == "lenderuser"
    assert data["business_name"] == "Lender Business"
    assert data["interest_rate_percent"] == 12.5
    assert data["last_login"] is not None
    assert "password_hash" not in data


def test_me_requires_token(client: TestClient):
    assert client.get("/v1/auth/me").status_code == 401


def test_me_rejects_garbage_token(client: TestClient):
    assert client.get("/v1/auth/me", headers=_bearer("not-a-token")).status_code == 401


def test_me_rejects_refresh_token(client: TestClient, tokens: dict):
    assert client.get("/v1/auth/me", headers=_bearer(tokens["refresh_token"])).status_code == 401


def test_me_rejects_foreign_signature(client: TestClient, registered: int):
    forged = issue_access_token(Identity(registered, 1), "attacker-secret-0123456789abcdef0123")
    assert client.get("/v1/auth/me", headers=_bearer(forged)).status_code == 401


def test_me_for_vanished_account(client: TestClient, secret: str):
    token = issue_access_token(Identity(99999, 1), secret)
    assert client.get("/v1/auth/me", headers=_bearer(token)).status_code == 404


def test_refresh(client: TestClient, tokens: dict):
    response = client.post("/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert response.status_code == 200
    refreshed = response.json()
    assert client.get("/v1/auth/me", headers=_bearer(refreshed["access_token"])).status_code == 200


def test_refresh_rejects_access_token(client: TestClient, tokens: dict):
    response = client.post("/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert response.status_code == 401


def test_login_locked_account_with_wrong_password(client: TestClient, db: Session, registered: int):
    db.execute(update(AccountRow).where(AccountRow.id == registered).values(is_locked=True))
    db.commit()

    response = client.post("/v1/auth/login", json={"username": "lenderuser", "password": "WrongPass123"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"
