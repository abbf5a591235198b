from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_session, get_session_supabase
from app.core.session import Session
from app.modules.client_database.schemas import ClientDatabaseInput, ClientDatabaseStatusResponse
from app.modules.credentials.meta_graph import MetaGraphClient
from app.modules.credentials.schemas import (
    MetaCredentialsSave, MetaCredentialsResponse, MetaCredentialsTest, MetaCredentialsTestResponse
)
from app.modules.credentials.service import CredentialService
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/credentials", tags=["credentials"])


def get_meta_client() -> MetaGraphClient:
    return MetaGraphClient()


def get_credential_service(
    supabase: Client = Depends(get_session_supabase),
    meta_client: MetaGraphClient = Depends(get_meta_client)
) -> CredentialService:
    return CredentialService(supabase, meta_client)


@router.get("/meta", response_model=Optional[MetaCredentialsResponse])
async def get_meta_credentials(
    session: Session = Depends(get_current_session),
    service: CredentialService = Depends(get_credential_service)
):
    """The caller's Meta credentials, or null when none were saved yet"""
    return service.get_meta_credentials(session)


@router.put("/meta", response_model=MetaCredentialsResponse)
async def save_meta_credentials(
    data: MetaCredentialsSave,
    session: Session = Depends(get_current_session),
    service: CredentialService = Depends(get_credential_service)
):
    """Create or update the caller's Meta credentials (pixel_id and access_token required)"""
    return service.save_meta_credentials(session, data)


@router.post("/meta/test", response_model=MetaCredentialsTestResponse)
async def test_meta_credentials(
    data: MetaCredentialsTest,
    session: Session = Depends(get_current_session),
    service: CredentialService = Depends(get_credential_service)
):
    """Check the Pixel ID / access token pair against the Meta Graph API"""
    return service.test_meta_credentials(data)


@router.get("/client-database", response_model=ClientDatabaseStatusResponse)
async def get_client_database(
    session: Session = Depends(get_current_session),
    service: CredentialService = Depends(get_credential_service)
):
    return service.get_client_database(session)


@router.put("/client-database", response_model=ClientDatabaseStatusResponse)
async def save_client_database(
    data: ClientDatabaseInput,
    session: Session = Depends(get_current_session),
    service: CredentialService = Depends(get_credential_service)
):
    """Probe the user's Supabase project, then store the pointer on the profile"""
    return service.save_client_database(session, data)


@router.delete("/client-database", response_model=ClientDatabaseStatusResponse)
async def disconnect_client_database(
    session: Session = Depends(get_current_session),
    service: CredentialService = Depends(get_credential_service)
):
    """Forget the user's Supabase project"""
    return service.disconnect_client_database(session)
