from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select
from pydantic import BaseModel

from ..database import get_session
from ..models import ActivityLog, User
from .auth import get_current_user

router = APIRouter()

class ActivityRead(BaseModel):
    id: int
    action: str
    description: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime


@router.get("/activity", response_model=List[ActivityRead])
def list_activity(
    limit: int = Query(default=50, ge=1, le=200),
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    statement = (
        select(ActivityLog)
        .where(ActivityLog.user_id == current_user.id)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())  # type: ignore
        .limit(limit)
    )
    return session.exec(statement).all()
