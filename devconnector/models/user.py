"""
User account model.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .post import Comment, Like, Post
    from .profile import Profile


class User(Base):
    """
    Registered developer account.

    Attributes:
        name: Display name, copied onto posts and comments at creation time
        email: Unique login email
        password: bcrypt hash, never returned by the API
        avatar: Gravatar URL derived from the email
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Relationships
    profile: Mapped["Profile | None"] = relationship(
        "Profile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="author", cascade="all, delete-orphan"
    )
    # Orphan tracking stays on the Post side; these only cascade account deletion
    likes: Mapped[list["Like"]] = relationship("Like", cascade="all")
    comments: Mapped[list["Comment"]] = relationship("Comment", cascade="all")
