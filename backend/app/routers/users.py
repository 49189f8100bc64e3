"""
Account registration endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devconnector.db import get_db

from ..schemas import RegisterRequest, TokenResponse
from ..services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=TokenResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Register a user and return a token for the new account."""
    return TokenResponse(token=user_service.register_user(db, payload))
