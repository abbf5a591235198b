"""
Explicit caller session.

Every service method that scopes a query to "the current user" receives a
Session instead of looking the user up from ambient state.
"""

from pydantic import BaseModel
from typing import Optional, Dict, Any


class Session(BaseModel):
    user_id: str
    access_token: str
    email: Optional[str] = None
    app_metadata: Dict[str, Any] = {}

    @classmethod
    def from_user_data(cls, user_data: Dict[str, Any], access_token: str) -> "Session":
        return cls(
            user_id=user_data["id"],
            email=user_data.get("email"),
            access_token=access_token,
            app_metadata=user_data.get("app_metadata") or {},
        )
