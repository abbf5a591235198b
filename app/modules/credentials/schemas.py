from pydantic import BaseModel, field_validator
from typing import Optional, Dict, Any
from datetime import datetime


def _required(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class MetaCredentialsSave(BaseModel):
    pixel_id: str
    access_token: str
    page_id: Optional[str] = None

    @field_validator("pixel_id", "access_token")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _required(v)

    @field_validator("page_id")
    @classmethod
    def blank_page_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class MetaCredentialsTest(BaseModel):
    pixel_id: str
    access_token: str

    @field_validator("pixel_id", "access_token")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _required(v)


class MetaCredentialsResponse(BaseModel):
    id: Optional[str] = None
    user_id: str
    pixel_id: str
    page_id: Optional[str] = None
    access_token: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MetaCredentialsTestResponse(BaseModel):
    valid: bool
    pixel_id: str
    pixel: Dict[str, Any] = {}
