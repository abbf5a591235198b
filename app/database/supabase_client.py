from typing import Callable
from supabase import create_client, Client, ClientOptions
from app.config import settings
from app.core.session import Session


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Use only in out-of-band scripts."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def create_auth_client() -> Client:
    """Anon client for one request's auth calls.

    GoTrue keeps the signed-in session on the client that made the call, so a
    client shared across requests would hold whoever signed in last.
    """
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


def get_supabase() -> Client:
    return create_auth_client()


def create_session_client(session: Session) -> Client:
    """Fresh client whose PostgREST calls run under the caller's row-level policies"""
    client = create_client(settings.supabase_url, settings.supabase_key)
    client.postgrest.auth(session.access_token)
    return client


def get_session_client_factory() -> Callable[[Session], Client]:
    """Dependency handle on create_session_client.

    Login has no bearer token to resolve a session from, so it builds its scoped
    client after signing in. Going through Depends keeps that client overridable
    the same way get_session_supabase is.
    """
    return create_session_client


def create_probe_client(url: str, key: str) -> Client:
    """Transient client bound to a user-owned store. Never cached."""
    return create_client(url, key)
