from typing import List, Optional, ClassVar
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field, Relationship

_OWNED = {"cascade": "all, delete"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__: ClassVar[str] = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    hashed_password: str
    image: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    items: List["VaultItem"] = Relationship(back_populates="owner", sa_relationship_kwargs=_OWNED)
    categories: List["Category"] = Relationship(back_populates="owner", sa_relationship_kwargs=_OWNED)
    activity_logs: List["ActivityLog"] = Relationship(back_populates="owner", sa_relationship_kwargs=_OWNED)
    settings: Optional["UserSettings"] = Relationship(
        back_populates="owner", sa_relationship_kwargs={"uselist": False, **_OWNED}
    )


class UserSettings(SQLModel, table=True):
    __tablename__: ClassVar[str] = "user_settings"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, index=True)
    theme: str = "system"
    auto_lock_minutes: int = 15
    default_view: str = "grid"
    two_factor_enabled: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    owner: Optional[User] = Relationship(back_populates="settings")


class Category(SQLModel, table=True):
    __tablename__: ClassVar[str] = "categories"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    name: str
    color: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    owner: Optional[User] = Relationship(back_populates="categories")
    items: List["VaultItem"] = Relationship(back_populates="category")


class VaultItem(SQLModel, table=True):
    __tablename__: ClassVar[str] = "vault_items"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    title: str
    username: Optional[str] = None
    encrypted_password: str
    website: Optional[str] = None
    notes: Optional[str] = None
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    is_favorite: bool = Field(default=False)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    owner: Optional[User] = Relationship(back_populates="items")
    category: Optional[Category] = Relationship(back_populates="items")


class ActivityLog(SQLModel, table=True):
    __tablename__: ClassVar[str] = "activity_logs"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    action: str
    description: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)

    owner: Optional[User] = Relationship(back_populates="activity_logs")
