from sqlalchemy import Column, String, Boolean, DateTime, func
from league_backend.core.database import Base

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = (ROLE_ADMIN, ROLE_USER)


class User(Base):
    __tablename__ = "users"

    user_id = Column(String, primary_key=True, index=True)
    email = Column(String, nullable=False)
    display_name = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id = Column(String, primary_key=True, index=True)
    role = Column(String, nullable=False, default=ROLE_USER)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


class UserInvite(Base):
    __tablename__ = "user_invites"

    invite_code = Column(String, primary_key=True, index=True)
    email = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_USER)
    created_by_admin_id = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    used = Column(Boolean, nullable=False, default=False)
    used_by = Column(String, nullable=True)
    used_at = Column(DateTime, nullable=True)
