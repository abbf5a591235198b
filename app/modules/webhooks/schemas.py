from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class WebhookCreate(BaseModel):
    user_id: str
    webhook_url: str

    @field_validator("user_id", "webhook_url")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class WebhookResponse(BaseModel):
    id: str
    user_id: str
    webhook_url: str
    created_by_admin: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WebhookWithUserResponse(WebhookResponse):
    email: Optional[str] = None
    user_label: str
