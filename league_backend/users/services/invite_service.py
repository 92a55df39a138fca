import logging
import secrets
import string
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from league_backend.users.models.user_model import UserInvite, ROLES
from league_backend.users.services.user_service import UserService

logger = logging.getLogger(__name__)

INVITE_CODE_LENGTH = 9
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invite_code() -> str:
    """Random upper-case alphanumeric code handed to the invitee."""
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


class InviteService:
    def __init__(self, db: Session):
        self.db = db
        self.user_service = UserService(db)

    def create_user_invite(self, email: str, role: str, created_by_admin_id: str) -> UserInvite:
        if role not in ROLES:
            raise ValueError(f"Unknown role '{role}'")

        invite_code = generate_invite_code()
        while self.db.query(UserInvite).filter(UserInvite.invite_code == invite_code).first():
            invite_code = generate_invite_code()

        invite = UserInvite(
            invite_code=invite_code,
            email=email,
            role=role,
            created_by_admin_id=created_by_admin_id,
            used=False,
        )
        self.db.add(invite)
        self.db.commit()
        self.db.refresh(invite)
        logger.info(f"Created {role} invite for {email} by {created_by_admin_id}")
        return invite

    def get_invite(self, invite_code: str) -> Optional[UserInvite]:
        """The invite for this code, or None if it doesn't exist or was already used."""
        invite = self.db.query(UserInvite).filter(UserInvite.invite_code == invite_code).first()
        if invite and not invite.used:
            return invite
        return None

    def mark_invite_as_used(self, invite_code: str, user_id: str) -> UserInvite:
        invite = self.db.query(UserInvite).filter(UserInvite.invite_code == invite_code).first()
        if not invite:
            raise ValueError(f"Invite {invite_code} does not exist")

        invite.used = True
        invite.used_by = user_id
        invite.used_at = func.now()
        self.db.commit()
        self.db.refresh(invite)
        return invite

    def get_pending_invites(self):
        return self.db.query(UserInvite).filter(UserInvite.used.is_(False)).all()

    def activate_account(self, invite_code: str, user_id: str, email: str, display_name: str, photo_url: str = None):
        """Create the user's profile with the role their invite grants, then burn the invite."""
        invite = self.get_invite(invite_code)
        if invite is None:
            raise ValueError("Invalid or already used invite code")

        user = self.user_service.create_user_document(user_id, email, display_name, photo_url)
        self.user_service.set_user_role(user_id, invite.role)
        self.mark_invite_as_used(invite_code, user_id)
        logger.info(f"Activated account {user_id} as {invite.role}")
        return user
