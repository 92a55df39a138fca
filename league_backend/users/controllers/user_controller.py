import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from sqlalchemy.orm import Session
from league_backend.core.context import UserContext, get_user_context, require_admin
from league_backend.core.database import get_db
from league_backend.users.schemas.user_schema import (
    InviteCreate, InviteOut, AccountActivation, RoleUpdate, UserWithRole,
)
from league_backend.users.services.invite_service import InviteService
from league_backend.users.services.user_service import UserService
from league_backend.notifications.services.email_service import EmailService
from league_backend.media.services.image_upload_service import ImageUploadService, ImageUploadError

logger = logging.getLogger(__name__)

invite_router = APIRouter()
user_router = APIRouter()


@invite_router.post("/", status_code=201)
def create_invite(payload: InviteCreate, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    """
    Create an invite and email the code to the invitee.
    """
    try:
        invite = InviteService(db).create_user_invite(payload.email, payload.role, context.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))

    email_sent = EmailService().send_invite(invite.email, invite.invite_code, invite.role)
    if not email_sent:
        logger.warning(f"[WARN] Invite {invite.invite_code} created but email to {invite.email} failed")
    return {"invite": InviteOut.model_validate(invite), "email_sent": email_sent}


@invite_router.get("/pending", response_model=List[InviteOut])
def get_pending_invites(db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    return InviteService(db).get_pending_invites()


@invite_router.get("/{invite_code}", response_model=InviteOut)
def get_invite(invite_code: str, db: Session = Depends(get_db)):
    invite = InviteService(db).get_invite(invite_code)
    if not invite:
        raise HTTPException(status_code=404, detail="Invalid or already used invite code")
    return invite


@user_router.post("/activate", status_code=201)
def activate_account(payload: AccountActivation, db: Session = Depends(get_db)):
    """Create the profile for a newly signed-up user and apply their invite's role."""
    try:
        invite_service = InviteService(db)
        user = invite_service.activate_account(
            payload.invite_code, payload.user_id, payload.email, payload.display_name, payload.photo_url
        )
        return {"user_id": user.user_id, "role": invite_service.user_service.get_user_role(user.user_id)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@user_router.get("/me")
def get_me(context: UserContext = Depends(get_user_context)):
    return {"user_id": context.user_id, "role": context.role, "is_admin": context.is_admin}


@user_router.get("/", response_model=List[UserWithRole])
def get_users(db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    return UserService(db).get_all_users_with_roles()


@user_router.put("/{user_id}/role")
def set_user_role(user_id: str, payload: RoleUpdate, db: Session = Depends(get_db),
                  context: UserContext = Depends(require_admin)):
    try:
        user_role = UserService(db).set_user_role(user_id, payload.role)
        return {"user_id": user_role.user_id, "role": user_role.role}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@user_router.post("/me/photo")
async def upload_profile_picture(file: UploadFile = File(...), db: Session = Depends(get_db),
                                 context: UserContext = Depends(get_user_context)):
    """Upload a new profile picture for the calling user."""
    if context.user_id is None:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")

    user_service = UserService(db)
    user_service.get_user(context.user_id)
    try:
        url = await ImageUploadService().upload(file.filename, await file.read())
    except ImageUploadError as e:
        raise HTTPException(status_code=502, detail=str(e))

    user = user_service.update_profile_picture(context.user_id, url)
    return {"user_id": user.user_id, "photo_url": user.photo_url}
