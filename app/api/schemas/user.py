from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.api.schemas.common import CamelModel


class UserResponse(CamelModel):
    id: int
    uid: str
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    provider: str
    role: str
    created_at: datetime
    last_login_at: datetime


class RoleUpdate(BaseModel):
    role: str


class UserEnvelope(BaseModel):
    user: UserResponse


class LoginResponse(BaseModel):
    message: str
    user: UserResponse


class RoleUpdateResponse(BaseModel):
    message: str
    user: UserResponse


class UserListEnvelope(BaseModel):
    users: List[UserResponse]
