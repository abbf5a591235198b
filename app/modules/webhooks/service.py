from supabase import Client
from app.core.errors import store_error, is_unique_violation
from app.core.session import Session
from app.modules.profiles.service import ProfileService, NO_EMAIL_LABEL
from app.modules.webhooks.schemas import WebhookCreate, WebhookResponse, WebhookWithUserResponse
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

UNKNOWN_USER_LABEL = "Unknown user"
WEBHOOK_EXISTS_MESSAGE = "This user already has a webhook. Delete the existing one first."


class WebhookService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_own_webhook(self, session: Session) -> Optional[WebhookResponse]:
        """The webhook provisioned for the caller, if any"""
        try:
            result = self.supabase.table("webhook_urls")\
                .select("*")\
                .eq("user_id", session.user_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                return None
            return WebhookResponse(**result.data)
        except Exception as e:
            raise store_error(e, "load webhook")

    def list_webhooks(self) -> List[WebhookWithUserResponse]:
        """All webhooks, newest first, labelled with the owner's email"""
        profiles = ProfileService(self.supabase).list_profiles()
        try:
            result = self.supabase.table("webhook_urls")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            raise store_error(e, "list webhooks")

        emails = {p["id"]: p.get("email") for p in profiles}
        webhooks = []
        for row in result.data or []:
            if row["user_id"] in emails:
                email = emails[row["user_id"]]
                label = email or NO_EMAIL_LABEL
            else:
                email = None
                label = UNKNOWN_USER_LABEL
            webhooks.append(WebhookWithUserResponse(**row, email=email, user_label=label))
        return webhooks

    def create_webhook(self, data: WebhookCreate) -> WebhookResponse:
        """Assign a webhook to a user. The store's unique(user_id) keeps it to one per user."""
        try:
            result = self.supabase.table("webhook_urls").insert({
                "user_id": data.user_id,
                "webhook_url": data.webhook_url,
                "created_by_admin": True
            }).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=409, detail=WEBHOOK_EXISTS_MESSAGE)
            raise store_error(e, "create webhook")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create webhook")

        logger.info(f"Webhook created for user {data.user_id}")
        return WebhookResponse(**result.data[0])

    def delete_webhook(self, webhook_id: str) -> None:
        try:
            result = self.supabase.table("webhook_urls")\
                .delete()\
                .eq("id", webhook_id)\
                .execute()
        except Exception as e:
            raise store_error(e, "delete webhook")

        if not result.data:
            raise HTTPException(status_code=404, detail="Webhook not found")
        logger.info(f"Webhook {webhook_id} deleted")
