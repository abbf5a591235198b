from fastapi import APIRouter, Depends
from app.config.roles_config import AppRole
from app.core.dependencies import get_current_session, get_session_supabase, require_role
from app.core.session import Session
from app.modules.profiles.schemas import ProfileOption
from app.modules.profiles.service import ProfileService
from app.modules.webhooks.schemas import WebhookCreate, WebhookResponse, WebhookWithUserResponse
from app.modules.webhooks.service import WebhookService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

require_admin = require_role(AppRole.ADMIN)


def get_webhook_service(supabase: Client = Depends(get_session_supabase)) -> WebhookService:
    return WebhookService(supabase)


@router.get("/me", response_model=Optional[WebhookResponse])
async def get_my_webhook(
    session: Session = Depends(get_current_session),
    service: WebhookService = Depends(get_webhook_service)
):
    """Webhook URL an admin provisioned for the caller, or null"""
    return service.get_own_webhook(session)


@router.get("", response_model=List[WebhookWithUserResponse])
async def list_webhooks(
    admin: Session = Depends(require_admin),
    service: WebhookService = Depends(get_webhook_service)
):
    """List every webhook with its owner's email (admin only)"""
    return service.list_webhooks()


@router.get("/users", response_model=List[ProfileOption])
async def list_webhook_users(
    admin: Session = Depends(require_admin),
    supabase: Client = Depends(get_session_supabase)
):
    """Users an admin can assign a webhook to"""
    return ProfileService(supabase).list_profile_options()


@router.post("", response_model=WebhookResponse, status_code=201)
async def create_webhook(
    data: WebhookCreate,
    admin: Session = Depends(require_admin),
    service: WebhookService = Depends(get_webhook_service)
):
    """Assign a webhook URL to a user (admin only, one per user)"""
    return service.create_webhook(data)


@router.delete("/{webhook_id}", status_code=204)
async def delete_webhook(
    webhook_id: str,
    admin: Session = Depends(require_admin),
    service: WebhookService = Depends(get_webhook_service)
):
    """Remove a webhook (admin only)"""
    service.delete_webhook(webhook_id)
    return None
