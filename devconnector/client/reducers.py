"""
Reducers for each slice of client state.

Every slice is a frozen dataclass; reducers build a new instance with
dataclasses.replace and leave unrelated actions untouched.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from . import action_types as t
from .store import Action

# =============================================================================
# Auth
# =============================================================================


@dataclass(frozen=True)
class AuthState:
    token: str | None = None
    is_authenticated: bool = False
    loading: bool = True
    user: Mapping[str, Any] | None = None


_AUTH_CLEARED = (t.REGISTER_FAIL, t.AUTH_ERROR, t.LOGIN_FAIL, t.LOGOUT, t.ACCOUNT_DELETED)


def auth_reducer(state: AuthState | None, action: Action) -> AuthState:
    state = state or AuthState()

    if action.type == t.USER_LOADED:
        return replace(state, is_authenticated=True, loading=False, user=action.payload)
    if action.type in (t.REGISTER_SUCCESS, t.LOGIN_SUCCESS):
        return replace(state, token=action.payload["token"], is_authenticated=True, loading=False)
    if action.type in _AUTH_CLEARED:
        return replace(state, token=None, is_authenticated=False, loading=False, user=None)
    return state


# =============================================================================
# Alerts
# =============================================================================


@dataclass(frozen=True)
class Alert:
    id: str
    msg: str
    alert_type: str
    status: int | None = None


@dataclass(frozen=True)
class AlertState:
    alerts: tuple[Alert, ...] = ()


def alert_reducer(state: AlertState | None, action: Action) -> AlertState:
    state = state or AlertState()

    if action.type == t.SET_ALERT:
        return replace(state, alerts=(*state.alerts, action.payload))
    if action.type == t.REMOVE_ALERT:
        return replace(state, alerts=tuple(a for a in state.alerts if a.id != action.payload))
    return state


# =============================================================================
# Posts
# =============================================================================


@dataclass(frozen=True)
class PostState:
    posts: tuple[Mapping[str, Any], ...] = ()
    post: Mapping[str, Any] | None = None
    loading: bool = True
    error: Mapping[str, Any] | None = None


def _with_likes(post: Mapping[str, Any], post_id: int, likes: list) -> Mapping[str, Any]:
    if post["id"] != post_id:
        return post
    return {**post, "likes": likes}


def post_reducer(state: PostState | None, action: Action) -> PostState:
    state = state or PostState()
    payload = action.payload

    if action.type == t.GET_POSTS:
        return replace(state, posts=tuple(payload), loading=False)
    if action.type == t.GET_POST:
        return replace(state, post=payload, loading=False)
    if action.type == t.ADD_POST:
        return replace(state, posts=(payload, *state.posts), loading=False)
    if action.type == t.DELETE_POST:
        return replace(
            state, posts=tuple(p for p in state.posts if p["id"] != payload), loading=False
        )
    if action.type == t.POST_ERROR:
        return replace(state, error=payload, loading=False)
    if action.type == t.UPDATE_LIKES:
        post_id, likes = payload["post_id"], payload["likes"]
        current = state.post
        if current is not None:
            current = _with_likes(current, post_id, likes)
        return replace(
            state,
            posts=tuple(_with_likes(p, post_id, likes) for p in state.posts),
            post=current,
            loading=False,
        )
    if action.type == t.ADD_COMMENT:
        if state.post is None:
            return state
        return replace(state, post={**state.post, "comments": payload}, loading=False)
    if action.type == t.REMOVE_COMMENT:
        if state.post is None:
            return state
        comments = [c for c in state.post.get("comments", []) if c["id"] != payload]
        return replace(state, post={**state.post, "comments": comments}, loading=False)
    return state


# =============================================================================
# Profiles
# =============================================================================


@dataclass(frozen=True)
class ProfileState:
    profile: Mapping[str, Any] | None = None
    profiles: tuple[Mapping[str, Any], ...] = ()
    repos: tuple[Mapping[str, Any], ...] = ()
    loading: bool = True
    error: Mapping[str, Any] | None = None


def profile_reducer(state: ProfileState | None, action: Action) -> ProfileState:
    state = state or ProfileState()
    payload = action.payload

    if action.type in (t.GET_PROFILE, t.UPDATE_PROFILE):
        return replace(state, profile=payload, loading=False)
    if action.type == t.GET_PROFILES:
        return replace(state, profiles=tuple(payload), loading=False)
    if action.type == t.GET_REPOS:
        return replace(state, repos=tuple(payload), loading=False)
    if action.type == t.PROFILE_ERROR:
        return replace(state, error=payload, loading=False, profile=None)
    if action.type == t.CLEAR_PROFILE:
        return replace(state, profile=None, repos=(), loading=False)
    return state


REDUCERS = {
    "auth": auth_reducer,
    "alert": alert_reducer,
    "post": post_reducer,
    "profile": profile_reducer,
}
