from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.roles_config import AppRole
from app.core.dependencies import get_auth_service, get_current_session, get_session_supabase
from app.core.session import Session
from app.database.supabase_client import get_session_client_factory
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, MeResponse
)
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from app.modules.roles.service import RoleService
from supabase import Client
from typing import Callable
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    client_factory: Callable[[Session], Client] = Depends(get_session_client_factory)
):
    """Sign in and get an access token. The caller's profile is created on first sign-in."""
    token = service.login(login_data)
    session = Session(user_id=token.user_id, email=token.email, access_token=token.access_token)
    ProfileService(client_factory(session)).ensure_profile(session)
    logger.info(f"User {token.user_id} signed in")
    return token


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_current_user(
    session: Session = Depends(get_current_session),
    supabase: Client = Depends(get_session_supabase)
):
    """Current user and roles, so the client knows whether to offer the admin view"""
    role_service = RoleService(supabase)
    return MeResponse(
        id=session.user_id,
        email=session.email,
        roles=[r.role for r in role_service.list_roles(session)],
        is_admin=role_service.has_role(session.user_id, AppRole.ADMIN)
    )
