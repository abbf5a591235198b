from pydantic import BaseModel
from typing import Optional


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    client_supabase_url: Optional[str] = None
    has_client_database: bool = False

    @classmethod
    def from_row(cls, row: dict) -> "ProfileResponse":
        return cls(
            id=row["id"],
            email=row.get("email"),
            client_supabase_url=row.get("client_supabase_url"),
            has_client_database=bool(row.get("client_supabase_url") and row.get("client_supabase_key")),
        )


class ProfileOption(BaseModel):
    """A user entry in the admin's user selector"""
    id: str
    email: Optional[str] = None
    label: str
