"""
Repository pattern implementations for data access.

Usage:
    from devconnector.repositories import PostRepository
    from devconnector.db import db

    with db.session() as session:
        repo = PostRepository(session)
        posts = repo.list_recent()
"""

from .base import BaseRepository
from .post_repository import PostRepository
from .profile_repository import ProfileRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "PostRepository",
    "ProfileRepository",
    "UserRepository",
]
