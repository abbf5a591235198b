from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_session, get_session_supabase
from app.core.session import Session
from app.modules.profiles.schemas import ProfileResponse
from app.modules.profiles.service import ProfileService
from supabase import Client

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_session_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    session: Session = Depends(get_current_session),
    service: ProfileService = Depends(get_profile_service)
):
    """Profile of the signed-in user. The client database key is never echoed."""
    return service.get_profile(session)
