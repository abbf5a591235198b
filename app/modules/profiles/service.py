from supabase import Client
from app.core.errors import store_error
from app.core.session import Session
from app.modules.profiles.schemas import ProfileResponse, ProfileOption
from fastapi import HTTPException
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

NO_EMAIL_LABEL = "No email"


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def ensure_profile(self, session: Session) -> None:
        """Create the caller's profile on first sign-in; existing rows are left untouched"""
        try:
            self.supabase.table("profiles").upsert(
                {"id": session.user_id, "email": session.email},
                on_conflict="id",
                ignore_duplicates=True
            ).execute()
        except Exception as e:
            raise store_error(e, "create profile")

    def get_profile_row(self, session: Session) -> Optional[dict]:
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", session.user_id)\
                .maybe_single()\
                .execute()
            return result.data if result else None
        except Exception as e:
            raise store_error(e, "load profile")

    def get_profile(self, session: Session) -> ProfileResponse:
        row = self.get_profile_row(session)
        if not row:
            raise HTTPException(status_code=404, detail="Profile not found")
        return ProfileResponse.from_row(row)

    def list_profiles(self) -> List[dict]:
        """All profiles visible to the caller, ordered by email (admins see every row)"""
        try:
            result = self.supabase.table("profiles")\
                .select("id, email")\
                .order("email")\
                .execute()
            return result.data or []
        except Exception as e:
            raise store_error(e, "list profiles")

    def list_profile_options(self) -> List[ProfileOption]:
        return [
            ProfileOption(id=p["id"], email=p.get("email"), label=p.get("email") or NO_EMAIL_LABEL)
            for p in self.list_profiles()
        ]
