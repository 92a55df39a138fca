from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session
from league_backend.core.database import get_db
from league_backend.users.models.user_model import ROLE_ADMIN, ROLE_USER
from league_backend.users.services.user_service import UserService


@dataclass(frozen=True)
class UserContext:
    """Identity of the caller, passed explicitly to whatever needs it."""
    user_id: Optional[str]
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def get_user_context(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> UserContext:
    """Build the caller's context from the id forwarded by the auth layer."""
    if not x_user_id:
        return UserContext(user_id=None)

    role = UserService(db).get_user_role(x_user_id) or ROLE_USER
    return UserContext(user_id=x_user_id, role=role)


def require_admin(context: UserContext = Depends(get_user_context)) -> UserContext:
    if context.user_id is None:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    if not context.is_admin:
        raise HTTPException(status_code=403, detail="Admin role required")
    return context
