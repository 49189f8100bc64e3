"""
SQLAlchemy models for DevConnector.

Usage:
    from devconnector.models import User, Profile, Post
"""

from .base import Base
from .post import Comment, Like, Post
from .profile import SOCIAL_NETWORKS, Education, Experience, Profile
from .user import User

__all__ = [
    # Base
    "Base",
    # User
    "User",
    # Profile
    "Profile",
    "Experience",
    "Education",
    "SOCIAL_NETWORKS",
    # Post
    "Post",
    "Like",
    "Comment",
]
