"""
Backend services for DevConnector.
"""

from . import post_service, profile_service, user_service

__all__ = [
    "post_service",
    "profile_service",
    "user_service",
]
