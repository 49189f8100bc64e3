"""
Account service: registration, login and account lookup.
"""

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from devconnector.exceptions import RequestValidationFailed
from devconnector.logging import get_logger
from devconnector.models import User
from devconnector.repositories import UserRepository
from devconnector.security import get_password_hash, gravatar_url, verify_password

from ..auth.jwt import create_user_token
from ..schemas import LoginRequest, RegisterRequest
from ..validation import check_not_empty

logger = get_logger("api.user_service")

MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid Credentials"


def _normalize_email(email: str | None, message: str) -> str:
    try:
        return validate_email(email or "", check_deliverability=False).normalized.lower()
    except EmailNotValidError:
        raise RequestValidationFailed.single("email", message) from None


def register_user(db: Session, payload: RegisterRequest) -> str:
    """Create an account and return a token for it."""
    check_not_empty(payload, {"name": "Name is required"})
    email = _normalize_email(payload.email, "Please include a valid email")
    if not payload.password or len(payload.password) < MIN_PASSWORD_LENGTH:
        raise RequestValidationFailed.single(
            "password",
            f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters",
        )

    repo = UserRepository(db)
    if repo.get_by_email(email) is not None:
        raise RequestValidationFailed.single("email", "User already exists")

    user = repo.create_user(
        name=payload.name.strip(),
        email=email,
        password_hash=get_password_hash(payload.password),
        avatar=gravatar_url(email),
    )
    db.commit()
    return create_user_token(user.id)


def authenticate_user(db: Session, payload: LoginRequest) -> str:
    """Check credentials and return a token."""
    email = _normalize_email(payload.email, "Please include a valid email")
    check_not_empty(payload, {"password": "Password is required"})

    user = UserRepository(db).get_by_email(email)
    if user is None or not verify_password(payload.password, user.password):
        logger.info("login_failed")
        raise RequestValidationFailed.single("email", INVALID_CREDENTIALS)

    logger.info("login_succeeded", user_id=user.id)
    return create_user_token(user.id)


def delete_account(db: Session, user: User) -> None:
    """Remove the user, their profile, posts, likes and comments."""
    user_id = user.id
    UserRepository(db).delete_account(user)
    db.commit()
    logger.info("account_deleted", user_id=user_id)
