from fastapi import APIRouter, Depends
from app.config.roles_config import AppRole
from app.core.dependencies import get_current_session, get_session_supabase
from app.core.session import Session
from app.modules.roles.schemas import MyRolesResponse
from app.modules.roles.service import RoleService
from supabase import Client

router = APIRouter(prefix="/roles", tags=["roles"])


def get_role_service(supabase: Client = Depends(get_session_supabase)) -> RoleService:
    return RoleService(supabase)


@router.get("/me", response_model=MyRolesResponse)
async def get_my_roles(
    session: Session = Depends(get_current_session),
    service: RoleService = Depends(get_role_service)
):
    """Roles assigned to the signed-in user; is_admin comes from the has_role predicate"""
    assignments = service.list_roles(session)
    return MyRolesResponse(
        user_id=session.user_id,
        roles=[a.role for a in assignments],
        is_admin=service.has_role(session.user_id, AppRole.ADMIN)
    )
