from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict

Role = Literal["admin", "user"]


class InviteCreate(BaseModel):
    email: str
    role: Role = "user"


class InviteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    invite_code: str
    email: str
    role: Role
    created_by_admin_id: str
    created_at: Optional[datetime] = None
    used: bool
    used_by: Optional[str] = None
    used_at: Optional[datetime] = None


class AccountActivation(BaseModel):
    invite_code: str
    user_id: str
    email: str
    display_name: str
    photo_url: Optional[str] = None


class RoleUpdate(BaseModel):
    role: Role


class UserWithRole(BaseModel):
    user_id: str
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    initials: str
    role: Role
