import logging
import random
from datetime import datetime, timezone
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlmodel import Session, select
from pydantic import BaseModel, EmailStr, Field
from jose import JWTError, jwt

from ..database import get_session
from ..models import User
from ..security import get_password_hash, verify_password, create_access_token
from ..config import settings
from ..defaults import AVATARS, seed_user_defaults
from .. import activity

logger = logging.getLogger(__name__)

router = APIRouter()

# --- Request / response bodies ---

class UserCreate(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=8)

class Token(BaseModel):
    access_token: str
    token_type: str

class UserRead(BaseModel):
    id: int
    name: str
    email: str
    image: Optional[str] = None
    created_at: datetime

class PasswordChange(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)

class MessageResponse(BaseModel):
    message: str

# --- Current user dependency ---
# Reads "Authorization: Bearer <token>"; tokenUrl points at the login route
# so the interactive docs can authenticate.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

async def get_current_user(request: Request,
                           token: Annotated[str, Depends(oauth2_scheme)],
                           session: Session = Depends(get_session)
                        ) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        subject = payload.get("sub")
        if subject is None:
            raise credentials_exception
        user_id = int(subject)
    except (JWTError, ValueError):
        raise credentials_exception

    user = session.get(User, user_id)
    if user is None:
        raise credentials_exception
    request.state.user_id = user.id
    return user

# --- Routes ---

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, request: Request, session: Session = Depends(get_session)):
    email = user_in.email.strip().lower()
    statement = select(User).where(User.email == email)
    if session.exec(statement).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

    new_user = User(
        name=user_in.name,
        email=email,
        hashed_password=get_password_hash(user_in.password),
        image=random.choice(AVATARS),
    )
    session.add(new_user)
    session.commit()
    session.refresh(new_user)
    user_id: int = new_user.id  # type: ignore
    logger.info("Registered user %s", user_id)

    seed_user_defaults(session, user_id)
    activity.record_activity(session, user_id, activity.REGISTER, "User account created", request)
    session.refresh(new_user)
    return new_user

@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    request: Request,
    session: Session = Depends(get_session)
):
    # the OAuth2 form calls it "username"; accounts are keyed by email
    statement = select(User).where(User.email == form_data.username.strip().lower())
    user = session.exec(statement).first()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id: int = user.id  # type: ignore
    access_token = create_access_token(subject=str(user_id))
    activity.record_activity(session, user_id, activity.LOGIN, "User logged in with credentials", request)
    return {"access_token": access_token, "token_type": "bearer"}

@router.get("/me", response_model=UserRead)
def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user

@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: PasswordChange,
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    if not verify_password(payload.current_password, current_user.hashed_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    current_user.hashed_password = get_password_hash(payload.new_password)
    current_user.updated_at = datetime.now(timezone.utc)
    session.add(current_user)
    session.commit()

    activity.record_activity(
        session, current_user.id, activity.CHANGE_PASSWORD,  # type: ignore
        "Master password changed successfully", request,
    )
    return {"message": "Password changed successfully"}

@router.delete("/account", response_model=MessageResponse)
def delete_account(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """Delete the account together with its items, categories, settings and logs."""
    user_id = current_user.id
    session.delete(current_user)
    session.commit()
    logger.info("Deleted user %s", user_id)
    return {"message": "Account deleted successfully"}
