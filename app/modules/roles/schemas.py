from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from app.config.roles_config import AppRole


class RoleAssignmentResponse(BaseModel):
    id: str
    user_id: str
    role: AppRole
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MyRolesResponse(BaseModel):
    user_id: str
    roles: List[AppRole]
    is_admin: bool


class AccessDecision(BaseModel):
    allowed: bool
    role: AppRole
    reason: Optional[str] = None
    redirect_to: Optional[str] = None
