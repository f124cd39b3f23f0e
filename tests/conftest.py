import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_EMAIL"] = "admin@example.org"
os.environ["ADMIN_PASSWORD"] = "AdminPass123"

import pytest
from fastapi.testclient import TestClient

from eca_admin.core.config import Settings
from eca_admin.main import create_app

ADMIN_EMAIL = "admin@example.org"
ADMIN_PASSWORD = "AdminPass123"


@pytest.fixture
def settings(tmp_path):
    # file database, so that several apps of one test share their data
    return Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'eca_admin.db'}")


@pytest.fixture
def client(settings):
    """Fresh database per test, logged in as the bootstrap super admin"""
    app = create_app(settings)
    with TestClient(app) as test_client:
        response = test_client.post(
            "/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200
        token = response.json()["accessToken"]
        test_client.headers["Authorization"] = f"Bearer {token}"
        # only the bearer header authenticates the test requests
        test_client.cookies.clear()
        yield test_client


@pytest.fixture
def anonymous(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(client):
    def _make_user(name="Jeanne Martin", **fields):
        payload = {"name": name, **fields}
        response = client.post("/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_user


@pytest.fixture
def make_book(client):
    def _make_book(title="Le Petit Prince", author="Antoine de Saint-Exupéry", **fields):
        response = client.post("/books", json={"title": title, "author": author, **fields})
        assert response.status_code == 201, response.text
        return response.json()

    return _make_book


@pytest.fixture
def statuses(client):
    response = client.get("/statuses")
    assert response.status_code == 200
    return response.json()
