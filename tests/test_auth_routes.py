"""Login gate over HTTP: auth endpoints, redirects, shell and error mapping."""

import pytest

from fake_backend import PLAIN_USER, READ_ONLY, SUPER_ADMIN, SUPPORT_ADMIN


def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_startup_session_check_leaves_console_signed_out(client):
    data = client.get("/api/v1/auth/session").json()

    assert data["state"] == "unauthenticated"
    assert data["is_authenticated"] is False
    assert data["is_loading"] is False
    assert data["admin"] is None


def test_shell_redirects_to_login_when_signed_out(client):
    response = client.get("/")

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_protected_page_redirects_to_login(client):
    response = client.get("/api/v1/users")

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_login_page_when_signed_out(client):
    response = client.get("/login")

    assert response.status_code == 200
    assert response.json()["login"] == "/api/v1/auth/login"


def test_login_success(client, login):
    response = login(SUPER_ADMIN)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["admin"]["email"] == SUPER_ADMIN
    assert data["admin"]["role"] == "SuperAdmin"

    me = client.get("/api/v1/auth/me").json()
    assert me["email"] == SUPER_ADMIN


def test_login_page_redirects_home_when_signed_in(client, login):
    login(SUPPORT_ADMIN)

    response = client.get("/login")

    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_shell_lists_navigation(client, login):
    login(SUPER_ADMIN)

    data = client.get("/").json()

    assert data["admin"]["role"] == "SuperAdmin"
    names = [item["name"] for item in data["navigation"]]
    assert names[0] == "Overview"
    assert "Admins" in names


def test_navigation_is_filtered_by_role(client, login):
    login(READ_ONLY)

    names = [item["name"] for item in client.get("/api/v1/navigation").json()]

    assert "Admins" not in names
    assert "Users" in names


def test_login_wrong_password(client, login):
    response = login(SUPER_ADMIN, "bad-password")

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"
    session = client.get("/api/v1/auth/session").json()
    assert session["is_authenticated"] is False
    assert session["last_error"] == "invalid_credentials"


def test_login_non_admin_is_rejected(client, login, fake_backend):
    response = login(PLAIN_USER)

    assert response.status_code == 401
    assert "admin access" in response.json()["detail"]
    assert fake_backend.access_tokens == {}
    session = client.get("/api/v1/auth/session").json()
    assert session["state"] == "unauthenticated"
    assert session["last_error"] == "not_admin"


def test_login_requires_valid_email(client):
    response = client.post("/api/v1/auth/login", json={"email": "not-an-email", "password": "x"})

    assert response.status_code == 422


def test_logout(client, login):
    login(SUPER_ADMIN)

    response = client.post("/api/v1/auth/logout")

    assert response.status_code == 200
    assert client.get("/api/v1/users").status_code == 303


@pytest.mark.parametrize("email, permissions, can", [
    (SUPER_ADMIN, ["delete", "manage_admins", "modify"], {"modify": True, "delete": True, "manage_admins": True}),
    (SUPPORT_ADMIN, ["modify"], {"modify": True, "delete": False, "manage_admins": False}),
    (READ_ONLY, [], {"modify": False, "delete": False, "manage_admins": False}),
])
def test_check_permissions(client, login, email, permissions, can):
    login(email)

    data = client.get("/api/v1/auth/check-permissions").json()

    assert data["permissions"] == permissions
    assert data["can"] == can


def test_expired_backend_session_redirects_to_login(client, login, fake_backend):
    login(SUPER_ADMIN)
    fake_backend.revoke_all_tokens()

    response = client.post("/api/v1/users/u1/extend-trial", json={"days": 7})

    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert client.get("/api/v1/auth/session").json()["is_authenticated"] is False


def test_backend_rejection_keeps_status(client, login, fake_backend):
    login(SUPER_ADMIN)
    fake_backend.fail_rpc("extend_trial_secure", status_code=400, message="User has no active trial")

    response = client.post("/api/v1/users/u1/extend-trial", json={"days": 7})

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "User has no active trial"
    assert data["error_code"] == "P0001"


def test_backend_failure_is_bad_gateway(client, login, fake_backend):
    login(SUPER_ADMIN)
    fake_backend.fail_rpc("get_users_with_subscriptions", status_code=500, message="boom")

    response = client.get("/api/v1/users")

    assert response.status_code == 502
    assert response.json()["message"] == "boom"


def test_unknown_path_is_not_found(client):
    response = client.get("/does/not/exist")

    assert response.status_code == 404
    assert response.json()["home"] == "/"


def test_known_path_with_wrong_method_is_not_allowed(client):
    response = client.get("/api/v1/auth/login")

    assert response.status_code == 405
    assert response.headers["allow"] == "POST"


def test_post_to_get_only_path_is_not_allowed(client):
    response = client.post("/health")

    assert response.status_code == 405
    assert "GET" in response.headers["allow"]
