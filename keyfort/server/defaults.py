import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from .models import Category, UserSettings

logger = logging.getLogger(__name__)

AVATARS = [f"/avatars/avatar-{n}.svg" for n in range(1, 10)]

DEFAULT_CATEGORIES = [
    ("Social Media", "#3b82f6"),
    ("Banking", "#10b981"),
    ("Work", "#f59e0b"),
    ("Personal", "#8b5cf6"),
]


def seed_user_defaults(session: Session, user_id: int) -> None:
    """Give a new account its settings row and starter categories.

    Each step is best effort so a failure never blocks registration.
    """
    try:
        session.add(UserSettings(user_id=user_id))
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.warning("Failed to create default settings for user %s", user_id, exc_info=True)

    try:
        session.add_all([Category(user_id=user_id, name=name, color=color) for name, color in DEFAULT_CATEGORIES])
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.warning("Failed to create default categories for user %s", user_id, exc_info=True)
