"""
Action functions: one REST call each, then dispatch.

On success the domain action is dispatched, plus an alert where the user
should see confirmation. On failure the slice's error action carries
{"msg", "status"} and every error message is raised as a "danger" alert.
Nothing is retried. Functions return True on success and False otherwise.
"""

import uuid
from collections.abc import Callable, Mapping
from typing import Any

from devconnector.logging import get_logger

from . import action_types as t
from .api import ApiError
from .context import AppContext
from .reducers import Alert
from .store import Action

logger = get_logger("client.actions")


# =============================================================================
# Alerts
# =============================================================================


def set_alert(ctx: AppContext, msg: str, alert_type: str, status: int | None = None) -> str:
    """Add an alert and return its ID. Callers decide when to remove it."""
    alert_id = str(uuid.uuid4())
    alert = Alert(id=alert_id, msg=msg, alert_type=alert_type, status=status)
    ctx.store.dispatch(Action(t.SET_ALERT, alert))
    return alert_id


def remove_alert(ctx: AppContext, alert_id: str) -> None:
    ctx.store.dispatch(Action(t.REMOVE_ALERT, alert_id))


def _fail(ctx: AppContext, error_type: str, error: ApiError, alert: bool = True) -> bool:
    logger.info("api_call_failed", action=error_type, status=error.status, msg=error.msg)
    if alert:
        for message in error.messages:
            set_alert(ctx, message, "danger", status=error.status)
    ctx.store.dispatch(Action(error_type, {"msg": error.msg, "status": error.status}))
    return False


def _call(
    ctx: AppContext,
    error_type: str,
    request: Callable[[], Any],
    on_success: Callable[[Any], None],
    alert: bool = True,
) -> bool:
    try:
        data = request()
    except ApiError as e:
        return _fail(ctx, error_type, e, alert=alert)
    on_success(data)
    return True


# =============================================================================
# Auth
# =============================================================================


def load_user(ctx: AppContext) -> bool:
    """
    Fetch the signed-in user for the stored token.

    A stale or missing token just means "signed out": AUTH_ERROR is
    dispatched without an alert.
    """
    if not ctx.api.token:
        ctx.store.dispatch(Action(t.AUTH_ERROR))
        return False
    return _call(
        ctx,
        t.AUTH_ERROR,
        lambda: ctx.api.get("/api/auth"),
        lambda user: ctx.store.dispatch(Action(t.USER_LOADED, user)),
        alert=False,
    )


def _signed_in(ctx: AppContext, success_type: str, data: Mapping[str, Any]) -> None:
    ctx.api.set_auth_token(data["token"])
    ctx.store.dispatch(Action(success_type, data))
    load_user(ctx)


def register(ctx: AppContext, name: str, email: str, password: str) -> bool:
    return _call(
        ctx,
        t.REGISTER_FAIL,
        lambda: ctx.api.post("/api/users", {"name": name, "email": email, "password": password}),
        lambda data: _signed_in(ctx, t.REGISTER_SUCCESS, data),
    )


def login(ctx: AppContext, email: str, password: str) -> bool:
    return _call(
        ctx,
        t.LOGIN_FAIL,
        lambda: ctx.api.post("/api/auth", {"email": email, "password": password}),
        lambda data: _signed_in(ctx, t.LOGIN_SUCCESS, data),
    )


def logout(ctx: AppContext) -> None:
    """Forget the token and every slice of state."""
    ctx.api.set_auth_token(None)
    ctx.store.reset()
    ctx.store.dispatch(Action(t.LOGOUT))


# =============================================================================
# Posts
# =============================================================================


def get_posts(ctx: AppContext) -> bool:
    return _call(
        ctx,
        t.POST_ERROR,
        lambda: ctx.api.get("/api/posts"),
        lambda posts: ctx.store.dispatch(Action(t.GET_POSTS, posts)),
    )


def get_post(ctx: AppContext, post_id: int) -> bool:
    return _call(
        ctx,
        t.POST_ERROR,
        lambda: ctx.api.get(f"/api/posts/{post_id}"),
        lambda post: ctx.store.dispatch(Action(t.GET_POST, post)),
    )


def add_post(ctx: AppContext, text: str) -> bool:
    def done(post):
        ctx.store.dispatch(Action(t.ADD_POST, post))
        set_alert(ctx, "Post Created", "success")

    return _call(ctx, t.POST_ERROR, lambda: ctx.api.post("/api/posts", {"text": text}), done)


def delete_post(ctx: AppContext, post_id: int) -> bool:
    def done(_):
        ctx.store.dispatch(Action(t.DELETE_POST, post_id))
        set_alert(ctx, "Post Removed", "success")

    return _call(ctx, t.POST_ERROR, lambda: ctx.api.delete(f"/api/posts/{post_id}"), done)


def add_like(ctx: AppContext, post_id: int) -> bool:
    return _call(
        ctx,
        t.POST_ERROR,
        lambda: ctx.api.put(f"/api/posts/like/{post_id}"),
        lambda likes: ctx.store.dispatch(
            Action(t.UPDATE_LIKES, {"post_id": post_id, "likes": likes})
        ),
    )


def remove_like(ctx: AppContext, post_id: int) -> bool:
    return _call(
        ctx,
        t.POST_ERROR,
        lambda: ctx.api.put(f"/api/posts/unlike/{post_id}"),
        lambda likes: ctx.store.dispatch(
            Action(t.UPDATE_LIKES, {"post_id": post_id, "likes": likes})
        ),
    )


def add_comment(ctx: AppContext, post_id: int, text: str) -> bool:
    def done(comments):
        ctx.store.dispatch(Action(t.ADD_COMMENT, comments))
        set_alert(ctx, "Comment Added", "success")

    return _call(
        ctx, t.POST_ERROR, lambda: ctx.api.post(f"/api/posts/comment/{post_id}", {"text": text}), done
    )


def delete_comment(ctx: AppContext, post_id: int, comment_id: int) -> bool:
    def done(_):
        ctx.store.dispatch(Action(t.REMOVE_COMMENT, comment_id))
        set_alert(ctx, "Comment Removed", "success")

    return _call(
        ctx,
        t.POST_ERROR,
        lambda: ctx.api.delete(f"/api/posts/comment/{post_id}/{comment_id}"),
        done,
    )


# =============================================================================
# Profiles
# =============================================================================


def get_current_profile(ctx: AppContext) -> bool:
    return _call(
        ctx,
        t.PROFILE_ERROR,
        lambda: ctx.api.get("/api/profile/me"),
        lambda profile: ctx.store.dispatch(Action(t.GET_PROFILE, profile)),
    )


def get_profiles(ctx: AppContext) -> bool:
    ctx.store.dispatch(Action(t.CLEAR_PROFILE))
    return _call(
        ctx,
        t.PROFILE_ERROR,
        lambda: ctx.api.get("/api/profile"),
        lambda profiles: ctx.store.dispatch(Action(t.GET_PROFILES, profiles)),
    )


def get_profile_by_id(ctx: AppContext, user_id: int) -> bool:
    return _call(
        ctx,
        t.PROFILE_ERROR,
        lambda: ctx.api.get(f"/api/profile/user/{user_id}"),
        lambda profile: ctx.store.dispatch(Action(t.GET_PROFILE, profile)),
    )


def get_github_repos(ctx: AppContext, username: str) -> bool:
    return _call(
        ctx,
        t.PROFILE_ERROR,
        lambda: ctx.api.get(f"/api/profile/github/{username}"),
        lambda repos: ctx.store.dispatch(Action(t.GET_REPOS, repos)),
    )


def create_profile(ctx: AppContext, form: Mapping[str, Any], edit: bool = False) -> bool:
    """Create or update the caller's profile from a flat form."""

    def done(profile):
        ctx.store.dispatch(Action(t.GET_PROFILE, profile))
        set_alert(ctx, "Profile Updated" if edit else "Profile Created", "success")

    return _call(ctx, t.PROFILE_ERROR, lambda: ctx.api.post("/api/profile", dict(form)), done)


def add_experience(ctx: AppContext, form: Mapping[str, Any]) -> bool:
    def done(profile):
        ctx.store.dispatch(Action(t.UPDATE_PROFILE, profile))
        set_alert(ctx, "Experience Added", "success")

    return _call(
        ctx, t.PROFILE_ERROR, lambda: ctx.api.put("/api/profile/experience", dict(form)), done
    )


def add_education(ctx: AppContext, form: Mapping[str, Any]) -> bool:
    def done(profile):
        ctx.store.dispatch(Action(t.UPDATE_PROFILE, profile))
        set_alert(ctx, "Education Added", "success")

    return _call(
        ctx, t.PROFILE_ERROR, lambda: ctx.api.put("/api/profile/education", dict(form)), done
    )


def delete_experience(ctx: AppContext, exp_id: int) -> bool:
    def done(profile):
        ctx.store.dispatch(Action(t.UPDATE_PROFILE, profile))
        set_alert(ctx, "Experience Removed", "success")

    return _call(
        ctx, t.PROFILE_ERROR, lambda: ctx.api.delete(f"/api/profile/experience/{exp_id}"), done
    )


def delete_education(ctx: AppContext, edu_id: int) -> bool:
    def done(profile):
        ctx.store.dispatch(Action(t.UPDATE_PROFILE, profile))
        set_alert(ctx, "Education Removed", "success")

    return _call(
        ctx, t.PROFILE_ERROR, lambda: ctx.api.delete(f"/api/profile/education/{edu_id}"), done
    )


def delete_account(ctx: AppContext) -> bool:
    """Delete the caller's account and everything they own. Cannot be undone."""

    def done(_):
        ctx.api.set_auth_token(None)
        ctx.store.dispatch(Action(t.CLEAR_PROFILE))
        ctx.store.dispatch(Action(t.ACCOUNT_DELETED))
        set_alert(ctx, "Your account has been permanently deleted", "")

    return _call(ctx, t.PROFILE_ERROR, lambda: ctx.api.delete("/api/profile"), done)
