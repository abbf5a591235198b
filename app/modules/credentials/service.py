from supabase import Client
from app.core.errors import store_error
from app.core.session import Session
from app.modules.client_database import prober
from app.modules.client_database.schemas import ClientDatabaseInput, ClientDatabaseStatusResponse
from app.modules.credentials.meta_graph import MetaGraphClient, MetaGraphError
from app.modules.credentials.schemas import (
    MetaCredentialsSave, MetaCredentialsResponse, MetaCredentialsTest, MetaCredentialsTestResponse
)
from app.modules.profiles.service import ProfileService
from typing import Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class CredentialService:
    def __init__(self, supabase: Client, meta_client: Optional[MetaGraphClient] = None):
        self.supabase = supabase
        self.meta_client = meta_client or MetaGraphClient()

    # Meta credentials

    def get_meta_credentials(self, session: Session) -> Optional[MetaCredentialsResponse]:
        try:
            result = self.supabase.table("meta_credentials")\
                .select("*")\
                .eq("user_id", session.user_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                return None
            return MetaCredentialsResponse(**result.data)
        except Exception as e:
            raise store_error(e, "load Meta credentials")

    def save_meta_credentials(self, session: Session, data: MetaCredentialsSave) -> MetaCredentialsResponse:
        """Insert the caller's credentials, or overwrite them in place if a row exists"""
        try:
            result = self.supabase.table("meta_credentials").upsert({
                "user_id": session.user_id,
                "pixel_id": data.pixel_id,
                "page_id": data.page_id,
                "access_token": data.access_token,
                "updated_at": datetime.now(timezone.utc).isoformat()
            }, on_conflict="user_id").execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save Meta credentials")

            logger.info(f"Saved Meta credentials for user {session.user_id}")
            return MetaCredentialsResponse(**result.data[0])
        except Exception as e:
            raise store_error(e, "save Meta credentials")

    def test_meta_credentials(self, data: MetaCredentialsTest) -> MetaCredentialsTestResponse:
        """Ask Meta whether it currently accepts this Pixel ID / token pair"""
        try:
            pixel = self.meta_client.validate_pixel(data.pixel_id, data.access_token)
        except MetaGraphError as e:
            status_code = 400 if e.status_code else 502
            raise HTTPException(status_code=status_code, detail=e.message)
        return MetaCredentialsTestResponse(valid=True, pixel_id=data.pixel_id, pixel=pixel)

    # Client database pointer

    def get_client_database(self, session: Session) -> ClientDatabaseStatusResponse:
        row = ProfileService(self.supabase).get_profile_row(session) or {}
        url = row.get("client_supabase_url")
        configured = bool(url and row.get("client_supabase_key"))
        return ClientDatabaseStatusResponse(configured=configured, url=url if configured else None)

    def save_client_database(self, session: Session, data: ClientDatabaseInput) -> ClientDatabaseStatusResponse:
        """Record the user's own Supabase project. A probe that is not `connected` blocks the write."""
        result = prober.probe_connection(data.url, data.key)
        if not result.ok:
            raise HTTPException(status_code=400, detail=result.message)

        url = data.url.strip()
        self._update_profile(session, {
            "client_supabase_url": url,
            "client_supabase_key": data.key.strip()
        }, "save client database")
        logger.info(f"User {session.user_id} connected client database {url}")
        return ClientDatabaseStatusResponse(configured=True, url=url)

    def disconnect_client_database(self, session: Session) -> ClientDatabaseStatusResponse:
        """Clear both pointer fields. Meta credentials and webhooks are left alone."""
        self._update_profile(session, {
            "client_supabase_url": None,
            "client_supabase_key": None
        }, "disconnect client database")
        logger.info(f"User {session.user_id} disconnected client database")
        return ClientDatabaseStatusResponse(configured=False)

    def _update_profile(self, session: Session, values: dict, action: str) -> dict:
        try:
            values["updated_at"] = datetime.now(timezone.utc).isoformat()
            result = self.supabase.table("profiles")\
                .update(values)\
                .eq("id", session.user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")
            return result.data[0]
        except Exception as e:
            raise store_error(e, action)
