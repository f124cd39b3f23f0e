from fastapi.testclient import TestClient

from eca_admin.main import create_app

ADMIN_EMAIL = "admin@example.org"
ADMIN_PASSWORD = "AdminPass123"


def test_health_is_public(anonymous):
    response = anonymous.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_endpoints_require_token(anonymous):
    for path in ("/assignments", "/coups-de-coeur", "/books", "/genres", "/news", "/users", "/statuses"):
        response = anonymous.get(path)
        assert response.status_code == 401, path
        assert response.json() == {"error": "Not authenticated"}


def test_invalid_token(anonymous):
    response = anonymous.get("/books", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_login_sets_cookie(anonymous):
    response = anonymous.post(
        "/auth/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["passwordNeedsChange"] is False
    assert response.cookies.get("access_token") == body["accessToken"]

    # the cookie alone authenticates
    assert anonymous.get("/auth/me").json()["email"] == ADMIN_EMAIL

    assert anonymous.post("/auth/logout").status_code == 204
    assert anonymous.get("/auth/me").status_code == 401


def test_wrong_password(anonymous):
    response = anonymous.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


def test_readers_cannot_log_in(client, anonymous):
    client.post("/users", json={"name": "Lecteur", "email": "lecteur@example.org"})
    response = anonymous.post("/auth/login", json={"email": "lecteur@example.org", "password": "x"})
    assert response.status_code == 401


def test_change_password(client, anonymous):
    staff = client.post(
        "/users", json={"email": "new@example.org", "name": "New", "role": "admin"}
    ).json()
    token = anonymous.post(
        "/auth/login", json={"email": "new@example.org", "password": staff["temporaryPassword"]}
    ).json()["accessToken"]
    headers = {"Authorization": f"Bearer {token}"}

    wrong = anonymous.post(
        "/auth/change-password",
        json={"currentPassword": "wrong", "newPassword": "BrandNew123"},
        headers=headers,
    )
    assert wrong.status_code == 400

    response = anonymous.post(
        "/auth/change-password",
        json={"currentPassword": staff["temporaryPassword"], "newPassword": "BrandNew123"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["passwordNeedsChange"] is False

    relog = anonymous.post("/auth/login", json={"email": "new@example.org", "password": "BrandNew123"})
    assert relog.json()["passwordNeedsChange"] is False


def test_disabled_staff_is_rejected(client, anonymous):
    staff = client.post(
        "/users", json={"email": "gone@example.org", "name": "Gone", "role": "admin"}
    ).json()
    token = anonymous.post(
        "/auth/login", json={"email": "gone@example.org", "password": staff["temporaryPassword"]}
    ).json()["accessToken"]

    client.put(f"/users/{staff['id']}", json={"isActive": False})
    response = anonymous.get("/books", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_login_rate_limit_follows_app_settings(settings):
    limited = settings.model_copy(update={"RATE_LIMIT_ENABLED": True, "LOGIN_RATE_LIMIT": "2/minute"})
    app = create_app(limited)
    try:
        with TestClient(app) as test_client:
            attempt = {"email": ADMIN_EMAIL, "password": "wrong-password"}
            assert test_client.post("/auth/login", json=attempt).status_code == 401
            assert test_client.post("/auth/login", json=attempt).status_code == 401
            response = test_client.post("/auth/login", json=attempt)
            assert response.status_code == 429
            assert "error" in response.json()
    finally:
        app.state.limiter.reset()


def test_rate_limit_disabled_by_settings(anonymous):
    attempt = {"email": ADMIN_EMAIL, "password": "wrong-password"}
    for _ in range(12):
        assert anonymous.post("/auth/login", json=attempt).status_code == 401
