"""
Core dependencies for session resolution and role-gated route protection
"""

from fastapi import Depends, HTTPException, Query, Security, WebSocketException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.config.roles_config import AppRole
from app.core.session import Session
from app.database.supabase_client import get_supabase, create_session_client
from app.modules.auth.service import AuthService
from app.modules.roles.schemas import AccessDecision
from app.modules.roles.service import RoleService
from supabase import Client
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_session(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Session:
    """Resolve the caller's session from the JWT bearer token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return Session.from_user_data(user_data, token)


def get_websocket_session(
    token: str = Query(...),
    auth_service: AuthService = Depends(get_auth_service)
) -> Session:
    """Browsers cannot set headers on a websocket handshake, so the token travels as a query param"""
    try:
        user_data = auth_service.get_current_user(token)
    except HTTPException as e:
        raise WebSocketException(code=status.WS_1008_POLICY_VIOLATION, reason=e.detail)
    return Session.from_user_data(user_data, token)


def get_session_supabase(session: Session = Depends(get_current_session)) -> Client:
    """Store client scoped to the caller, so row-level policies apply to every query"""
    return create_session_client(session)


def authorize(session: Session, role: AppRole, supabase: Client) -> AccessDecision:
    """Single allow/deny decision consumed by every role-gated operation"""
    if RoleService(supabase).has_role(session.user_id, role):
        return AccessDecision(allowed=True, role=role)
    return AccessDecision(
        allowed=False,
        role=role,
        reason=f"Role '{role.value}' required",
        redirect_to=settings.admin_redirect_path,
    )


def require_role(role: AppRole):
    """Factory function to create a role check dependency. Denied callers are redirected away."""
    def check_role(
        session: Session = Depends(get_current_session),
        supabase: Client = Depends(get_session_supabase)
    ) -> Session:
        decision = authorize(session, role, supabase)
        if not decision.allowed:
            logger.info(f"Redirecting user {session.user_id} away from {role.value} view")
            raise HTTPException(
                status_code=status.HTTP_303_SEE_OTHER,
                detail=decision.reason,
                headers={"Location": decision.redirect_to},
            )
        return session
    return check_role
