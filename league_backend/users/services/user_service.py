import logging
from typing import Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
from league_backend.users.models.user_model import User, UserRole, ROLES, ROLE_ADMIN, ROLE_USER

logger = logging.getLogger(__name__)


def get_initials(display_name: Optional[str]) -> str:
    """Up to two upper-case initials, '??' when there is nothing to go on."""
    if not display_name:
        return "??"
    names = display_name.strip().split()
    initials = "".join(name[0].upper() for name in names[:2])
    return initials or "??"


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.user_id == user_id).first()
        if not user:
            raise HTTPException(status_code=404, detail=f"User {user_id} not found")
        return user

    def create_user_document(self, user_id: str, email: str, display_name: str, photo_url: str = None) -> User:
        """Create the profile and a default 'user' role entry."""
        if self.db.query(User).filter(User.user_id == user_id).first():
            raise ValueError(f"User {user_id} already exists")

        user = User(user_id=user_id, email=email, display_name=display_name, photo_url=photo_url)
        self.db.add(user)
        if not self.db.query(UserRole).filter(UserRole.user_id == user_id).first():
            self.db.add(UserRole(user_id=user_id, role=ROLE_USER))
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_user_role(self, user_id: str) -> Optional[str]:
        user_role = self.db.query(UserRole).filter(UserRole.user_id == user_id).first()
        return user_role.role if user_role else None

    def is_user_admin(self, user_id: str) -> bool:
        return self.get_user_role(user_id) == ROLE_ADMIN

    def set_user_role(self, user_id: str, role: str) -> UserRole:
        if role not in ROLES:
            raise ValueError(f"Unknown role '{role}'")

        user_role = self.db.query(UserRole).filter(UserRole.user_id == user_id).first()
        if user_role:
            user_role.role = role
        else:
            user_role = UserRole(user_id=user_id, role=role)
            self.db.add(user_role)
        self.db.commit()
        self.db.refresh(user_role)
        logger.info(f"Set role of {user_id} to {role}")
        return user_role

    def get_all_users_with_roles(self):
        roles = {user_role.user_id: user_role.role for user_role in self.db.query(UserRole).all()}
        return [
            {
                "user_id": user.user_id,
                "email": user.email,
                "display_name": user.display_name,
                "photo_url": user.photo_url,
                "initials": get_initials(user.display_name),
                "role": roles.get(user.user_id, ROLE_USER),
            }
            for user in self.db.query(User).all()
        ]

    def update_profile_picture(self, user_id: str, photo_url: str) -> User:
        user = self.get_user(user_id)
        user.photo_url = photo_url
        self.db.commit()
        self.db.refresh(user)
        return user
