from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlmodel import Session, select
from pydantic import BaseModel, Field

from ..database import get_session
from ..models import Category, User, VaultItem
from .auth import get_current_user

router = APIRouter()

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    color: str = Field(pattern=r"^#[A-Fa-f0-9]{6}$")

class CategoryRead(BaseModel):
    id: int
    name: str
    color: str
    created_at: datetime
    updated_at: datetime

class CategoryWithCount(CategoryRead):
    vault_item_count: int = 0


@router.get("/categories", response_model=List[CategoryWithCount])
def list_categories(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    counts_statement = (
        select(VaultItem.category_id, func.count())
        .where(VaultItem.user_id == current_user.id, VaultItem.category_id != None)  # noqa: E711
        .group_by(VaultItem.category_id)
    )
    counts = {category_id: count for category_id, count in session.exec(counts_statement).all()}

    statement = select(Category).where(Category.user_id == current_user.id).order_by(Category.name)
    return [
        CategoryWithCount(**category.model_dump(), vault_item_count=counts.get(category.id, 0))
        for category in session.exec(statement).all()
    ]

@router.post("/categories", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    category = Category(**payload.model_dump(), user_id=current_user.id)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category
