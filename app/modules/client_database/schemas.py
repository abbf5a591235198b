from pydantic import BaseModel
from typing import Optional


class ClientDatabaseInput(BaseModel):
    url: str = ""
    key: str = ""


class ClientDatabaseStatusResponse(BaseModel):
    configured: bool
    url: Optional[str] = None
