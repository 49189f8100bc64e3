"""User repository for registration and login."""

from devconnector.logging import get_logger
from devconnector.models import User

from .base import BaseRepository

logger = get_logger("repository.user")


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        return self.session.query(User).filter(User.email == email.strip().lower()).first()

    def create_user(self, name: str, email: str, password_hash: str, avatar: str | None) -> User:
        """Create a user. The caller is responsible for hashing the password."""
        user = User(
            name=name,
            email=email.strip().lower(),
            password=password_hash,
            avatar=avatar,
        )
        self.session.add(user)
        self.session.flush()
        logger.info("user_created", user_id=user.id)
        return user

    def delete_account(self, user: User) -> None:
        """
        Delete a user together with everything they own.

        The ORM cascades remove the profile, the user's posts (with their
        likes and comments) and the user's likes and comments on other posts.
        """
        self.session.delete(user)
        self.session.flush()
