from supabase import Client
from app.config.roles_config import AppRole
from app.core.errors import store_error
from app.core.session import Session
from app.modules.roles.schemas import RoleAssignmentResponse
from typing import List
import logging

logger = logging.getLogger(__name__)


class RoleService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def has_role(self, user_id: str, role: AppRole) -> bool:
        """Evaluate the store's has_role() predicate. Absence of a role, or any failure, is False."""
        try:
            result = self.supabase.rpc("has_role", {
                "_user_id": user_id,
                "_role": role.value
            }).execute()
            return result.data is True
        except Exception as e:
            logger.error(f"Error evaluating has_role({user_id}, {role.value}): {e}")
            return False

    def list_roles(self, session: Session) -> List[RoleAssignmentResponse]:
        """Role assignments of the calling user"""
        try:
            result = self.supabase.table("user_roles")\
                .select("*")\
                .eq("user_id", session.user_id)\
                .execute()
            return [RoleAssignmentResponse(**row) for row in (result.data or [])]
        except Exception as e:
            raise store_error(e, "list roles")
