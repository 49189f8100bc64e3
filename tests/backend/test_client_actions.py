"""Client state container driven against the real API through TestClient."""

import pytest

from devconnector.client import ApiClient, AppContext, actions
from devconnector.client.reducers import AuthState


@pytest.fixture
def ctx(test_app_client):
    client, _ = test_app_client
    return AppContext(api=ApiClient(http=client))


@pytest.fixture
def signed_in(ctx):
    assert actions.register(ctx, "Jane Doe", "jane@example.com", "secret123") is True
    return ctx


def _alert_messages(ctx):
    return [alert.msg for alert in ctx.state["alert"].alerts]


def test_register_loads_user(signed_in):
    auth = signed_in.state["auth"]

    assert auth.is_authenticated is True
    assert auth.loading is False
    assert auth.token == signed_in.api.token
    assert auth.user["email"] == "jane@example.com"


def test_register_duplicate_fails_with_alert(signed_in):
    ctx = AppContext(api=ApiClient(http=signed_in.api.http))
    ctx.api.set_auth_token(None)

    assert actions.register(ctx, "Jane", "jane@example.com", "secret123") is False
    assert ctx.state["auth"].is_authenticated is False
    assert _alert_messages(ctx) == ["User already exists"]


def test_login_failure(ctx):
    assert actions.login(ctx, "nobody@example.com", "secret123") is False

    assert ctx.state["auth"] == AuthState(loading=False)
    assert _alert_messages(ctx) == ["Invalid Credentials"]


def test_post_flow(signed_in):
    ctx = signed_in

    assert actions.add_post(ctx, "Hello") is True
    post_id = ctx.state["post"].posts[0]["id"]
    assert _alert_messages(ctx) == ["Post Created"]

    assert actions.add_like(ctx, post_id) is True
    assert len(ctx.state["post"].posts[0]["likes"]) == 1

    assert actions.add_like(ctx, post_id) is False
    assert ctx.state["post"].error == {"msg": "Post already liked", "status": 400}

    assert actions.remove_like(ctx, post_id) is True
    assert ctx.state["post"].posts[0]["likes"] == []

    assert actions.get_post(ctx, post_id) is True
    assert actions.add_comment(ctx, post_id, "First!") is True
    comment_id = ctx.state["post"].post["comments"][0]["id"]
    assert actions.delete_comment(ctx, post_id, comment_id) is True
    assert ctx.state["post"].post["comments"] == []

    assert actions.delete_post(ctx, post_id) is True
    assert ctx.state["post"].posts == ()

    assert actions.get_posts(ctx) is True
    assert ctx.state["post"].posts == ()


def test_profile_flow(signed_in):
    ctx = signed_in

    assert actions.get_current_profile(ctx) is False
    assert ctx.state["profile"].error == {"msg": "There is no profile for this user", "status": 400}

    assert actions.create_profile(ctx, {"status": "Developer", "skills": "python, sql"}) is True
    assert ctx.state["profile"].profile["skills"] == ["python", "sql"]

    form = {"title": "Engineer", "company": "Acme", "from": "2020-01-01"}
    assert actions.add_experience(ctx, form) is True
    exp_id = ctx.state["profile"].profile["experience"][0]["id"]
    assert actions.delete_experience(ctx, exp_id) is True
    assert ctx.state["profile"].profile["experience"] == []

    assert actions.add_education(ctx, {"school": "MIT"}) is False
    assert "Degree is required" in _alert_messages(ctx)

    assert actions.get_profiles(ctx) is True
    assert len(ctx.state["profile"].profiles) == 1


def test_delete_account_clears_auth(signed_in):
    ctx = signed_in

    assert actions.delete_account(ctx) is True

    assert ctx.state["auth"].is_authenticated is False
    assert ctx.state["auth"].user is None
    assert ctx.state["profile"].profile is None
    assert ctx.api.token is None


def test_logout_resets_state(signed_in):
    ctx = signed_in
    actions.add_post(ctx, "Hello")

    actions.logout(ctx)

    assert ctx.state["post"].posts == ()
    assert ctx.state["alert"].alerts == ()
    assert ctx.state["auth"] == AuthState(loading=False)
    assert ctx.api.token is None
