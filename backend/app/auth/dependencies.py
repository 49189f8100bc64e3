"""
Authentication dependencies for FastAPI routes.

Accepts the token from either:
- Bearer token in the Authorization header
- the ``x-auth-token`` header sent by browser clients
"""

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from devconnector.db import get_db
from devconnector.logging import bind_context
from devconnector.models import User

from .jwt import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth", auto_error=False)


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    x_auth_token: str | None = Header(None, alias="x-auth-token"),
) -> str:
    """
    Extract JWT token from request.

    Checks in order:
    1. Authorization header (Bearer token)
    2. x-auth-token header
    """
    if token_header:
        return token_header

    if x_auth_token:
        return x_auth_token

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No token, authorization denied",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(get_token_from_request),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the authenticated user from the request token.

    Steps:
    1) Extract token from header
    2) Decode JWT and extract subject (user id)
    3) Load the user from DB or raise 401
    """
    try:
        payload = decode_access_token(token)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        ) from None

    user_id = payload.get("sub")
    if not user_id or not str(user_id).isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        )

    user = db.get(User, int(user_id))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    bind_context(user_id=user.id)
    return user
