from datetime import datetime, timezone
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session, select
from pydantic import BaseModel, Field

from ..database import get_session
from ..defaults import AVATARS
from ..models import User, UserSettings
from .auth import get_current_user
from .. import activity

router = APIRouter()

class SettingsRead(BaseModel):
    theme: str
    auto_lock_minutes: int
    default_view: str
    two_factor_enabled: bool
    updated_at: datetime

class SettingsUpdate(BaseModel):
    theme: Optional[Literal["light", "dark", "system"]] = None
    auto_lock_minutes: Optional[int] = Field(default=None, ge=1, le=1440)
    default_view: Optional[Literal["grid", "list"]] = None
    two_factor_enabled: Optional[bool] = None

class AvatarUpdate(BaseModel):
    avatar: str = Field(min_length=1)

class AvatarResponse(BaseModel):
    message: str
    avatar: str


def _load_settings(session: Session, user: User) -> UserSettings:
    statement = select(UserSettings).where(UserSettings.user_id == user.id)
    user_settings = session.exec(statement).first()
    if user_settings is None:
        # accounts whose seeding failed get defaults on first read
        user_settings = UserSettings(user_id=user.id)  # type: ignore
        session.add(user_settings)
        session.commit()
        session.refresh(user_settings)
    return user_settings


@router.get("/settings", response_model=SettingsRead)
def read_settings(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return _load_settings(session, current_user)

@router.put("/settings", response_model=SettingsRead)
def update_settings(
    payload: SettingsUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    user_settings = _load_settings(session, current_user)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user_settings, key, value)
    user_settings.updated_at = datetime.now(timezone.utc)
    session.add(user_settings)
    session.commit()
    session.refresh(user_settings)
    return user_settings

@router.put("/settings/avatar", response_model=AvatarResponse)
def update_avatar(
    payload: AvatarUpdate,
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    if payload.avatar not in AVATARS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid avatar selection")

    current_user.image = payload.avatar
    current_user.updated_at = datetime.now(timezone.utc)
    session.add(current_user)
    session.commit()

    activity.record_activity(
        session, current_user.id, activity.UPDATE_AVATAR, "Profile avatar updated", request  # type: ignore
    )
    return {"message": "Avatar updated successfully", "avatar": payload.avatar}
