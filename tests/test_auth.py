from app.database import supabase_client

from tests.conftest import ADMIN_TOKEN, USER_TOKEN, USER_ID, auth_header


def test_first_login_creates_profile(client, store):
    register = client.post("/api/v1/auth/register", json={"email": "new@example.com", "password": "pw"})
    assert register.status_code == 201
    new_id = register.json()["user_id"]

    response = client.post("/api/v1/auth/login", json={"email": "new@example.com", "password": "pw"})

    assert response.status_code == 200
    assert response.json()["user_id"] == new_id
    assert {"id": new_id, "email": "new@example.com"}.items() <= next(
        p for p in store.rows("profiles") if p["id"] == new_id
    ).items()


def test_login_keeps_existing_profile(client, store):
    profile = next(p for p in store.rows("profiles") if p["id"] == USER_ID)
    profile["client_supabase_url"] = "https://abc123.supabase.co"
    profile["client_supabase_key"] = "k"
    store.passwords["user@example.com"] = "pw"

    response = client.post("/api/v1/auth/login", json={"email": "user@example.com", "password": "pw"})

    assert response.status_code == 200
    assert response.json()["access_token"] == USER_TOKEN
    assert len([p for p in store.rows("profiles") if p["id"] == USER_ID]) == 1
    assert profile["client_supabase_url"] == "https://abc123.supabase.co"


def test_login_with_wrong_password(client):
    response = client.post("/api/v1/auth/login", json={"email": "user@example.com", "password": "nope"})

    assert response.status_code == 401


def test_register_existing_email(client):
    response = client.post("/api/v1/auth/register", json={"email": "user@example.com", "password": "pw"})

    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_me_reports_admin_flag(client):
    admin = client.get("/api/v1/auth/me", headers=auth_header(ADMIN_TOKEN)).json()
    user = client.get("/api/v1/auth/me", headers=auth_header(USER_TOKEN)).json()

    assert admin["is_admin"] is True and admin["email"] == "admin@example.com"
    assert user["is_admin"] is False and user["roles"] == ["user"]


def test_me_admin_flag_follows_role_predicate(client, store):
    store.rpc_error = RuntimeError("has_role unavailable")

    admin = client.get("/api/v1/auth/me", headers=auth_header(ADMIN_TOKEN)).json()

    assert admin["roles"] == ["admin"]
    assert admin["is_admin"] is False


def test_invalid_token_is_rejected(client):
    response = client.get("/api/v1/profiles/me", headers=auth_header("forged"))

    assert response.status_code == 401


def test_missing_token_is_rejected(client):
    assert client.get("/api/v1/profiles/me").status_code in (401, 403)


def test_logout_revokes_only_the_callers_session(client, store):
    client.get("/api/v1/auth/me", headers=auth_header(USER_TOKEN))
    client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "secret"})

    response = client.post("/api/v1/auth/logout", headers=auth_header(USER_TOKEN))

    assert response.status_code == 200
    assert store.auth.admin.revoked == [(USER_TOKEN, "local")]
    assert store.auth.signed_out == 0
    assert client.get("/api/v1/auth/me", headers=auth_header(USER_TOKEN)).status_code == 401
    assert client.get("/api/v1/auth/me", headers=auth_header(ADMIN_TOKEN)).status_code == 200


def test_auth_client_is_built_per_request(monkeypatch):
    built = []

    def fake_create_client(url, key, options=None):
        built.append(options)
        return object()

    monkeypatch.setattr(supabase_client, "create_client", fake_create_client)

    assert supabase_client.get_supabase() is not supabase_client.get_supabase()
    assert [o.persist_session for o in built] == [False, False]
    assert [o.auto_refresh_token for o in built] == [False, False]


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").headers["x-content-type-options"] == "nosniff"
