import logging
from typing import Optional
from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from .models import ActivityLog

logger = logging.getLogger(__name__)

REGISTER = "REGISTER"
LOGIN = "LOGIN"
CREATE_ITEM = "CREATE_ITEM"
ACCESS_ITEM = "ACCESS_ITEM"
UPDATE_ITEM = "UPDATE_ITEM"
DELETE_ITEM = "DELETE_ITEM"
CHANGE_PASSWORD = "CHANGE_PASSWORD"
UPDATE_AVATAR = "UPDATE_AVATAR"


def record_activity(session: Session, user_id: int, action: str, description: str,
                    request: Optional[Request] = None) -> None:
    """Append to the user's activity log.

    Best effort: must run after the main change is committed, since a failure
    here rolls the session back, is logged, and is not raised.
    """
    entry = ActivityLog(user_id=user_id, action=action, description=description)
    if request is not None:
        entry.ip_address = request.client.host if request.client else None
        entry.user_agent = request.headers.get("user-agent")
    try:
        session.add(entry)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.warning("Failed to record %s activity for user %s", action, user_id, exc_info=True)
