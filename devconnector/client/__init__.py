"""
Client-side state container for the DevConnector API.

    ctx = AppContext.create(base_url="http://localhost:8000")
    actions.login(ctx, "jane@example.com", "secret1")
    actions.get_posts(ctx)
    ctx.state["post"].posts
"""

from . import action_types, actions
from .api import ApiClient, ApiError
from .context import AppContext, create_store
from .reducers import AlertState, AuthState, PostState, ProfileState
from .store import Action, Store

__all__ = [
    "Action",
    "AlertState",
    "ApiClient",
    "ApiError",
    "AppContext",
    "AuthState",
    "PostState",
    "ProfileState",
    "Store",
    "action_types",
    "actions",
    "create_store",
]
