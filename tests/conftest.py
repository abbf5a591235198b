import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from app.config import settings
from app.core.dependencies import get_session_supabase
from app.database.supabase_client import get_supabase, get_session_client_factory
from app.main import app
from app.modules.auth.service import clear_auth_cache
from app.modules.client_database import prober
from tests.fakes import FakeSupabase, FakeProbeClient

ADMIN_TOKEN = "token-admin"
USER_TOKEN = "token-user"
OTHER_TOKEN = "token-other"

ADMIN_ID = "00000000-0000-0000-0000-00000000000a"
USER_ID = "00000000-0000-0000-0000-00000000000b"
OTHER_ID = "00000000-0000-0000-0000-00000000000c"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def store():
    fake = FakeSupabase()
    fake.add_user(ADMIN_TOKEN, "admin@example.com", user_id=ADMIN_ID)
    fake.add_user(USER_TOKEN, "user@example.com", user_id=USER_ID)
    fake.add_user(OTHER_TOKEN, None, user_id=OTHER_ID)
    fake.tables["profiles"] = [
        {"id": ADMIN_ID, "email": "admin@example.com", "client_supabase_url": None, "client_supabase_key": None},
        {"id": USER_ID, "email": "user@example.com", "client_supabase_url": None, "client_supabase_key": None},
        {"id": OTHER_ID, "email": None, "client_supabase_url": None, "client_supabase_key": None},
    ]
    fake.tables["user_roles"] = [
        {"id": "role-1", "user_id": ADMIN_ID, "role": "admin", "created_at": "2026-01-01T00:00:00+00:00"},
        {"id": "role-2", "user_id": USER_ID, "role": "user", "created_at": "2026-01-01T00:00:00+00:00"},
    ]
    return fake


@pytest.fixture
def client(store):
    clear_auth_cache()
    app.dependency_overrides[get_supabase] = lambda: store
    app.dependency_overrides[get_session_supabase] = lambda: store
    app.dependency_overrides[get_session_client_factory] = lambda: (lambda session: store)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def probe_clients(monkeypatch):
    """Replace the transient probe client; records every client built (i.e. every network attempt)"""
    built = []
    state = {"error": APIError({
        "message": 'relation "public._test_connection_" does not exist',
        "code": "42P01",
    })}

    def factory(url, key):
        fake = FakeProbeClient(state["error"])
        built.append((url, key, fake))
        return fake

    monkeypatch.setattr(prober, "create_probe_client", factory)
    factory.built = built
    factory.state = state
    return factory


@pytest.fixture
def fast_debounce(monkeypatch):
    monkeypatch.setattr(settings, "probe_debounce_seconds", 0.05)
    return settings.probe_debounce_seconds
