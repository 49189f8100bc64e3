"""
DevConnector core library.

Provides configuration, logging, database management, models,
repositories and the client-side state container for the DevConnector API.

Usage:
    from devconnector.db import db, get_db
    from devconnector.models import User, Profile, Post
    from devconnector.repositories import PostRepository, ProfileRepository
    from devconnector.config import get_settings
    from devconnector.logging import get_logger
"""

__version__ = "1.0.0"
