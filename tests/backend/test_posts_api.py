import pytest

from devconnector.models import Comment, Like, Post


def _create_post(client, headers, text="Hello world"):
    resp = client.post("/api/posts", json={"text": text}, headers=headers)
    assert resp.status_code == 200
    return resp.json()


def test_create_post_copies_author_details(authorized_client):
    client, headers, user_id, _ = authorized_client

    data = _create_post(client, headers, "My first post")

    assert data["text"] == "My first post"
    assert data["user"] == user_id
    assert data["name"] == "Jane Doe"
    assert data["avatar"].startswith("https://www.gravatar.com/avatar/")
    assert data["likes"] == []
    assert data["comments"] == []
    assert "date" in data


def test_create_post_requires_text(authorized_client):
    client, headers, _, session_factory = authorized_client

    resp = client.post("/api/posts", json={"text": "   "}, headers=headers)

    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert errors == [{"msg": "Text is required", "param": "text", "location": "body"}]
    session = session_factory()
    assert session.query(Post).count() == 0
    session.close()


def test_posts_require_token(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/posts")

    assert resp.status_code == 401
    assert resp.json()["detail"] == "No token, authorization denied"


def test_invalid_token_rejected(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/posts", headers={"x-auth-token": "not-a-jwt"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token is not valid"


def test_x_auth_token_header_accepted(test_app_client, make_user):
    from backend.app.auth.jwt import create_user_token

    client, _ = test_app_client
    user_id = make_user()

    resp = client.get("/api/posts", headers={"x-auth-token": create_user_token(user_id)})

    assert resp.status_code == 200
    assert resp.json() == []


def test_list_posts_newest_first(authorized_client):
    client, headers, _, _ = authorized_client
    first = _create_post(client, headers, "first")
    second = _create_post(client, headers, "second")

    resp = client.get("/api/posts", headers=headers)

    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [second["id"], first["id"]]


def test_get_missing_post_returns_404(authorized_client):
    client, headers, _, _ = authorized_client

    resp = client.get("/api/posts/999", headers=headers)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Post not found"


def test_delete_post_by_author(authorized_client):
    client, headers, _, session_factory = authorized_client
    post = _create_post(client, headers)
    client.put(f"/api/posts/like/{post['id']}", headers=headers)
    client.post(f"/api/posts/comment/{post['id']}", json={"text": "hi"}, headers=headers)

    resp = client.delete(f"/api/posts/{post['id']}", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {"msg": "Post removed"}
    session = session_factory()
    assert session.query(Post).count() == 0
    assert session.query(Like).count() == 0
    assert session.query(Comment).count() == 0
    session.close()


def test_delete_post_by_other_user_is_rejected(authorized_client, make_user, auth_headers):
    client, headers, _, session_factory = authorized_client
    post = _create_post(client, headers)
    other_headers = auth_headers(make_user("John Roe", "john@example.com"))

    resp = client.delete(f"/api/posts/{post['id']}", headers=other_headers)

    assert resp.status_code == 401
    assert resp.json()["detail"] == "User not authorized"
    session = session_factory()
    assert session.query(Post).count() == 1
    session.close()


def test_like_then_like_again_conflicts(authorized_client):
    client, headers, user_id, _ = authorized_client
    post = _create_post(client, headers)

    resp = client.put(f"/api/posts/like/{post['id']}", headers=headers)
    assert resp.status_code == 200
    likes = resp.json()
    assert len(likes) == 1
    assert likes[0]["user"] == user_id

    resp = client.put(f"/api/posts/like/{post['id']}", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Post already liked"

    resp = client.get(f"/api/posts/{post['id']}", headers=headers)
    assert len(resp.json()["likes"]) == 1


def test_likes_are_newest_first(authorized_client, make_user, auth_headers):
    client, headers, user_id, _ = authorized_client
    post = _create_post(client, headers)
    other_id = make_user("John Roe", "john@example.com")

    client.put(f"/api/posts/like/{post['id']}", headers=headers)
    resp = client.put(f"/api/posts/like/{post['id']}", headers=auth_headers(other_id))

    assert [like["user"] for like in resp.json()] == [other_id, user_id]


def test_unlike_before_like_conflicts(authorized_client):
    client, headers, _, _ = authorized_client
    post = _create_post(client, headers)

    resp = client.put(f"/api/posts/unlike/{post['id']}", headers=headers)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Post has not yet been liked"


def test_unlike_removes_like(authorized_client):
    client, headers, _, _ = authorized_client
    post = _create_post(client, headers)
    client.put(f"/api/posts/like/{post['id']}", headers=headers)

    resp = client.put(f"/api/posts/unlike/{post['id']}", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == []


def test_like_missing_post_returns_404(authorized_client):
    client, headers, _, _ = authorized_client

    resp = client.put("/api/posts/like/12345", headers=headers)

    assert resp.status_code == 404


def test_add_comment_prepends(authorized_client):
    client, headers, user_id, _ = authorized_client
    post = _create_post(client, headers)

    client.post(f"/api/posts/comment/{post['id']}", json={"text": "one"}, headers=headers)
    resp = client.post(f"/api/posts/comment/{post['id']}", json={"text": "two"}, headers=headers)

    assert resp.status_code == 200
    comments = resp.json()
    assert [c["text"] for c in comments] == ["two", "one"]
    assert comments[0]["user"] == user_id
    assert comments[0]["name"] == "Jane Doe"


def test_add_comment_requires_text(authorized_client):
    client, headers, _, _ = authorized_client
    post = _create_post(client, headers)

    resp = client.post(f"/api/posts/comment/{post['id']}", json={}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["msg"] == "Text is required"


def test_delete_comment_removes_the_requested_comment(authorized_client):
    client, headers, _, _ = authorized_client
    post = _create_post(client, headers)
    client.post(f"/api/posts/comment/{post['id']}", json={"text": "older"}, headers=headers)
    comments = client.post(
        f"/api/posts/comment/{post['id']}", json={"text": "newer"}, headers=headers
    ).json()
    older_id = comments[1]["id"]

    resp = client.delete(f"/api/posts/comment/{post['id']}/{older_id}", headers=headers)

    assert resp.status_code == 200
    assert [c["text"] for c in resp.json()] == ["newer"]


def test_delete_missing_comment_returns_404(authorized_client):
    client, headers, _, _ = authorized_client
    post = _create_post(client, headers)

    resp = client.delete(f"/api/posts/comment/{post['id']}/999", headers=headers)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Comment does not exist"


def test_delete_comment_by_other_user_is_rejected(authorized_client, make_user, auth_headers):
    client, headers, _, _ = authorized_client
    post = _create_post(client, headers)
    comment_id = client.post(
        f"/api/posts/comment/{post['id']}", json={"text": "mine"}, headers=headers
    ).json()[0]["id"]
    other_headers = auth_headers(make_user("John Roe", "john@example.com"))

    resp = client.delete(f"/api/posts/comment/{post['id']}/{comment_id}", headers=other_headers)

    assert resp.status_code == 401
    remaining = client.get(f"/api/posts/{post['id']}", headers=headers).json()["comments"]
    assert len(remaining) == 1


@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/api/posts/not-a-number"),
        ("DELETE", "/api/posts/not-a-number"),
        ("PUT", "/api/posts/like/abc"),
        ("PUT", "/api/posts/unlike/-1"),
    ],
)
def test_malformed_post_id_is_not_found(authorized_client, method, path):
    client, headers, _, _ = authorized_client

    resp = client.request(method, path, headers=headers)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Post not found"


def test_malformed_comment_id_is_not_found(authorized_client):
    client, headers, _, _ = authorized_client
    post = _create_post(client, headers)

    resp = client.delete(f"/api/posts/comment/{post['id']}/xyz", headers=headers)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Comment does not exist"
