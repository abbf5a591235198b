import httpx
import pytest
from postgrest.exceptions import APIError
from starlette.websockets import WebSocketDisconnect

from app.main import app
from app.modules.client_database.prober import INVALID_URL_MESSAGE, INVALID_KEY_MESSAGE
from app.modules.credentials.meta_graph import MetaGraphClient, UNEXPECTED_RESPONSE_MESSAGE
from app.modules.credentials.routes import get_meta_client
from tests.conftest import USER_ID, USER_TOKEN, auth_header

HEADERS = auth_header(USER_TOKEN)
CLIENT_URL = "https://abc123.supabase.co"


def meta_transport(handler):
    app.dependency_overrides[get_meta_client] = lambda: MetaGraphClient(
        base_url="https://graph.test", api_version="v18.0", transport=httpx.MockTransport(handler)
    )


def profile(store, user_id=USER_ID):
    return next(p for p in store.rows("profiles") if p["id"] == user_id)


# Meta credentials

@pytest.mark.parametrize("body", [
    {"pixel_id": "", "access_token": "EAAB"},
    {"pixel_id": "123", "access_token": ""},
    {"pixel_id": "   ", "access_token": "EAAB"},
    {"pixel_id": "123", "access_token": "  "},
    {"pixel_id": "123"},
])
def test_save_rejects_missing_required_fields_before_store(client, store, body):
    response = client.put("/api/v1/credentials/meta", json=body, headers=HEADERS)

    assert response.status_code == 422
    assert store.calls == []
    assert store.rows("meta_credentials") == []


def test_save_twice_keeps_one_row_with_last_values(client, store):
    first = {"pixel_id": "111", "page_id": "p1", "access_token": "EAA-first"}
    second = {"pixel_id": "222", "page_id": "", "access_token": "EAA-second"}

    assert client.put("/api/v1/credentials/meta", json=first, headers=HEADERS).status_code == 200
    response = client.put("/api/v1/credentials/meta", json=second, headers=HEADERS)

    assert response.status_code == 200
    rows = store.rows("meta_credentials")
    assert len(rows) == 1
    assert rows[0]["user_id"] == USER_ID
    assert (rows[0]["pixel_id"], rows[0]["page_id"], rows[0]["access_token"]) == ("222", None, "EAA-second")
    assert response.json()["pixel_id"] == "222"


def test_get_meta_credentials(client, store):
    assert client.get("/api/v1/credentials/meta", headers=HEADERS).json() is None

    client.put("/api/v1/credentials/meta", json={"pixel_id": "111", "access_token": "EAA"}, headers=HEADERS)
    data = client.get("/api/v1/credentials/meta", headers=HEADERS).json()

    assert data["pixel_id"] == "111"
    assert data["page_id"] is None


def test_store_rejection_is_passed_through(client, store):
    store.fail_tables["meta_credentials"] = APIError({
        "message": 'new row violates row-level security policy for table "meta_credentials"',
        "code": "42501",
    })

    response = client.put("/api/v1/credentials/meta", json={"pixel_id": "1", "access_token": "t"}, headers=HEADERS)

    assert response.status_code == 403
    assert response.json()["detail"] == 'new row violates row-level security policy for table "meta_credentials"'


def test_meta_test_accepts_valid_pair(client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"id": "111", "name": "Shop pixel"})

    meta_transport(handler)
    response = client.post("/api/v1/credentials/meta/test",
                           json={"pixel_id": "111", "access_token": "EAA"}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {"valid": True, "pixel_id": "111", "pixel": {"id": "111", "name": "Shop pixel"}}
    assert seen[0].url.path == "/v18.0/111"
    assert seen[0].url.params["access_token"] == "EAA"


def test_meta_test_surfaces_meta_message(client):
    def handler(request):
        return httpx.Response(400, json={"error": {
            "message": "Invalid OAuth access token - Cannot parse access token", "code": 190,
        }})

    meta_transport(handler)
    response = client.post("/api/v1/credentials/meta/test",
                           json={"pixel_id": "111", "access_token": "bad"}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid OAuth access token - Cannot parse access token"


def test_meta_message_read_from_javascript_labelled_body(client):
    def handler(request):
        return httpx.Response(
            400,
            content=b'{"error":{"message":"Invalid OAuth access token.","code":190}}',
            headers={"content-type": "text/javascript; charset=UTF-8"},
        )

    meta_transport(handler)
    response = client.post("/api/v1/credentials/meta/test",
                           json={"pixel_id": "111", "access_token": "bad"}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid OAuth access token."


def test_meta_success_without_json_body(client):
    meta_transport(lambda request: httpx.Response(200, text="<html>ok</html>"))

    response = client.post("/api/v1/credentials/meta/test",
                           json={"pixel_id": "111", "access_token": "EAA"}, headers=HEADERS)

    assert response.status_code == 502
    assert response.json()["detail"] == UNEXPECTED_RESPONSE_MESSAGE


def test_meta_test_without_json_error_body(client):
    meta_transport(lambda request: httpx.Response(500, text="upstream exploded"))

    response = client.post("/api/v1/credentials/meta/test",
                           json={"pixel_id": "111", "access_token": "EAA"}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid credentials"


def test_meta_test_unreachable(client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    meta_transport(handler)
    response = client.post("/api/v1/credentials/meta/test",
                           json={"pixel_id": "111", "access_token": "EAA"}, headers=HEADERS)

    assert response.status_code == 502


# Client database pointer

def test_save_client_database_after_successful_probe(client, store, probe_clients):
    response = client.put("/api/v1/credentials/client-database",
                          json={"url": CLIENT_URL, "key": "validlookingkey"}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {"configured": True, "url": CLIENT_URL}
    row = profile(store)
    assert row["client_supabase_url"] == CLIENT_URL
    assert row["client_supabase_key"] == "validlookingkey"


def test_invalid_url_blocks_save_without_network(client, store, probe_clients):
    response = client.put("/api/v1/credentials/client-database",
                          json={"url": "http://abc123.supabase.co", "key": "validlookingkey"}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == INVALID_URL_MESSAGE
    assert probe_clients.built == []
    assert profile(store)["client_supabase_url"] is None
    assert ("profiles", "update") not in store.calls


def test_invalid_key_blocks_save(client, store, probe_clients):
    probe_clients.state["error"] = APIError({"message": "Invalid API key"})

    response = client.put("/api/v1/credentials/client-database",
                          json={"url": CLIENT_URL, "key": "wrong"}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == INVALID_KEY_MESSAGE
    assert profile(store)["client_supabase_key"] is None


def test_disconnect_clears_pointer_only(client, store, probe_clients):
    client.put("/api/v1/credentials/meta", json={"pixel_id": "111", "access_token": "EAA"}, headers=HEADERS)
    store.tables["webhook_urls"] = [{
        "id": "wh-1", "user_id": USER_ID, "webhook_url": "https://hook.example.com/u",
        "created_by_admin": True, "created_at": "2026-01-01T00:00:00+00:00",
    }]
    client.put("/api/v1/credentials/client-database", json={"url": CLIENT_URL, "key": "k"}, headers=HEADERS)

    response = client.delete("/api/v1/credentials/client-database", headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {"configured": False, "url": None}
    row = profile(store)
    assert row["client_supabase_url"] is None and row["client_supabase_key"] is None
    assert len(store.rows("meta_credentials")) == 1
    assert store.rows("webhook_urls")[0]["webhook_url"] == "https://hook.example.com/u"


def test_client_database_status_never_returns_key(client, store, probe_clients):
    assert client.get("/api/v1/credentials/client-database", headers=HEADERS).json() == {
        "configured": False, "url": None,
    }

    client.put("/api/v1/credentials/client-database", json={"url": CLIENT_URL, "key": "secret"}, headers=HEADERS)
    status = client.get("/api/v1/credentials/client-database", headers=HEADERS).json()
    me = client.get("/api/v1/profiles/me", headers=HEADERS).json()

    assert status == {"configured": True, "url": CLIENT_URL}
    assert "secret" not in str(me)
    assert me["has_client_database"] is True


# Probe endpoints

def test_probe_endpoint_reports_connected_for_missing_table(client, store, probe_clients):
    response = client.post("/api/v1/client-database/probe",
                           json={"url": CLIENT_URL, "key": "validlookingkey"}, headers=HEADERS)

    assert response.json() == {"status": "connected", "message": "Your Supabase project is reachable."}
    assert store.calls == []


def test_probe_endpoint_wrong_scheme(client, probe_clients):
    response = client.post("/api/v1/client-database/probe",
                           json={"url": "http://abc123.supabase.co", "key": "validlookingkey"}, headers=HEADERS)

    assert response.json() == {"status": "error", "message": INVALID_URL_MESSAGE}
    assert probe_clients.built == []


def test_live_status_stream(client, probe_clients, fast_debounce):
    with client.websocket_connect(f"/api/v1/client-database/live?token={USER_TOKEN}") as ws:
        assert ws.receive_json() == {"status": "disconnected", "message": None}

        ws.send_json({"url": CLIENT_URL, "key": "validlookingkey"})
        assert ws.receive_json()["status"] == "connecting"
        assert ws.receive_json()["status"] == "connected"

        ws.send_json({"url": CLIENT_URL, "key": ""})
        assert ws.receive_json()["status"] == "disconnected"

        ws.send_json(["not", "an", "object"])
        assert ws.receive_json()["status"] == "error"

    assert len(probe_clients.built) == 1


def test_live_status_requires_valid_token(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/api/v1/client-database/live?token=nope") as ws:
            ws.receive_json()
