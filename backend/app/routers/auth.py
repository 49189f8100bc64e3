"""
Authentication endpoints: login and loading the current user.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devconnector.db import get_db
from devconnector.models import User

from ..auth.dependencies import get_current_user
from ..schemas import LoginRequest, TokenResponse, UserResponse
from ..services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """The authenticated user, without the password hash."""
    return UserResponse(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
        avatar=current_user.avatar,
        created_at=current_user.created_at,
    )


@router.post("", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a token."""
    return TokenResponse(token=user_service.authenticate_user(db, payload))
