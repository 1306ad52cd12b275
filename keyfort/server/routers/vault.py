import logging
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session, select
from pydantic import BaseModel, Field

from ..database import get_session
from ..models import Category, User, VaultItem
from .auth import get_current_user
from .categories import CategoryRead
from .. import activity

logger = logging.getLogger(__name__)

router = APIRouter()

class VaultItemWrite(BaseModel):
    title: str = Field(min_length=1)
    username: Optional[str] = None
    encrypted_password: str = Field(min_length=1)
    website: Optional[str] = None
    notes: Optional[str] = None
    category_id: Optional[int] = None
    is_favorite: bool = False

class VaultItemRead(BaseModel):
    id: int
    title: str
    username: Optional[str] = None
    encrypted_password: str
    website: Optional[str] = None
    notes: Optional[str] = None
    category_id: Optional[int] = None
    is_favorite: bool
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryRead] = None

class MessageResponse(BaseModel):
    message: str


def _to_read(item: VaultItem) -> VaultItemRead:
    category = CategoryRead.model_validate(item.category, from_attributes=True) if item.category else None
    return VaultItemRead(**item.model_dump(exclude={"user_id"}), category=category)

def _own_item(session: Session, item_id: int, user: User) -> VaultItem:
    item = session.get(VaultItem, item_id)
    if item is None or item.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vault item not found")
    return item

def _check_category(session: Session, category_id: Optional[int], user: User) -> None:
    if category_id is None:
        return
    category = session.get(Category, category_id)
    if category is None or category.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid category")


@router.get("/vault", response_model=List[VaultItemRead])
def list_vault_items(
    category_id: Optional[int] = None,
    is_favorite: Optional[bool] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    statement = select(VaultItem).where(VaultItem.user_id == current_user.id)
    if category_id is not None:
        statement = statement.where(VaultItem.category_id == category_id)
    if is_favorite:
        statement = statement.where(VaultItem.is_favorite == True)  # noqa: E712
    statement = statement.order_by(VaultItem.updated_at.desc(), VaultItem.id.desc())  # type: ignore
    return [_to_read(item) for item in session.exec(statement).all()]

@router.post("/vault", response_model=VaultItemRead, status_code=status.HTTP_201_CREATED)
def create_vault_item(
    payload: VaultItemWrite,
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    _check_category(session, payload.category_id, current_user)
    item = VaultItem(**payload.model_dump(), user_id=current_user.id)
    session.add(item)
    session.commit()
    session.refresh(item)
    logger.debug("User %s created vault item %s", current_user.id, item.id)

    response = _to_read(item)
    activity.record_activity(
        session, current_user.id, activity.CREATE_ITEM,  # type: ignore
        f"Created password for {payload.title}", request,
    )
    return response

@router.get("/vault/{item_id}", response_model=VaultItemRead)
def get_vault_item(
    item_id: int,
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    item = _own_item(session, item_id, current_user)
    response = _to_read(item)
    activity.record_activity(
        session, current_user.id, activity.ACCESS_ITEM,  # type: ignore
        f"Accessed password for {item.title}", request,
    )
    return response

@router.put("/vault/{item_id}", response_model=VaultItemRead)
def update_vault_item(
    item_id: int,
    payload: VaultItemWrite,
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    item = _own_item(session, item_id, current_user)
    _check_category(session, payload.category_id, current_user)

    # omitted fields keep their stored values; a missing category unfiles the item
    changes = payload.model_dump(exclude_unset=True)
    changes["category_id"] = payload.category_id
    for key, value in changes.items():
        setattr(item, key, value)
    item.updated_at = datetime.now(timezone.utc)
    session.add(item)
    session.commit()
    session.refresh(item)

    response = _to_read(item)
    activity.record_activity(
        session, current_user.id, activity.UPDATE_ITEM,  # type: ignore
        f"Updated password for {payload.title}", request,
    )
    return response

@router.delete("/vault/{item_id}", response_model=MessageResponse)
def delete_vault_item(
    item_id: int,
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    item = _own_item(session, item_id, current_user)
    title = item.title
    session.delete(item)
    session.commit()

    activity.record_activity(
        session, current_user.id, activity.DELETE_ITEM,  # type: ignore
        f"Deleted password for {title}", request,
    )
    return {"message": "Vault item deleted successfully"}
