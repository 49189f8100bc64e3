import pytest

from devconnector import github_api
from devconnector.exceptions import UpstreamError
from devconnector.models import Comment, Like, Post, Profile, User

PROFILE_PAYLOAD = {
    "status": "Developer",
    "skills": "python, fastapi, , sql ",
    "website": "x.com/a",
    "twitter": "https://twitter.com/jane",
    "youtube": "youtube.com/jane",
}

EXPERIENCE_PAYLOAD = {
    "title": "Engineer",
    "company": "Acme",
    "location": "Remote",
    "from": "2020-01-01",
    "to": "2021-06-30",
    "description": "Built things",
}


def _create_profile(client, headers, payload=None):
    resp = client.post("/api/profile", json=payload or PROFILE_PAYLOAD, headers=headers)
    assert resp.status_code == 200
    return resp.json()


def test_create_profile_normalizes_fields(authorized_client):
    client, headers, user_id, _ = authorized_client

    data = _create_profile(client, headers)

    assert data["status"] == "Developer"
    assert data["skills"] == ["python", "fastapi", "sql"]
    assert data["website"] == "http://x.com/a"
    assert data["social"]["twitter"] == "https://twitter.com/jane"
    assert data["social"]["youtube"] == "http://youtube.com/jane"
    assert data["social"]["facebook"] is None
    assert data["user"] == {"id": user_id, "name": "Jane Doe", "avatar": data["user"]["avatar"]}


def test_create_profile_requires_status_and_skills(authorized_client):
    client, headers, _, session_factory = authorized_client

    resp = client.post("/api/profile", json={"status": " ", "skills": ""}, headers=headers)

    assert resp.status_code == 400
    assert [e["msg"] for e in resp.json()["errors"]] == [
        "Status is required",
        "Skills are required",
    ]
    session = session_factory()
    assert session.query(Profile).count() == 0
    session.close()


def test_update_profile_keeps_unsupplied_fields(authorized_client):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers, {**PROFILE_PAYLOAD, "company": "Acme", "bio": "Hi"})

    data = _create_profile(
        client,
        headers,
        {"status": "Senior Developer", "skills": ["go"], "facebook": "fb.com/jane"},
    )

    assert data["status"] == "Senior Developer"
    assert data["skills"] == ["go"]
    assert data["company"] == "Acme"
    assert data["bio"] == "Hi"
    assert data["social"]["twitter"] == "https://twitter.com/jane"
    assert data["social"]["facebook"] == "http://fb.com/jane"


def test_get_my_profile_without_profile(authorized_client):
    client, headers, _, _ = authorized_client

    resp = client.get("/api/profile/me", headers=headers)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "There is no profile for this user"


def test_public_profile_endpoints(authorized_client):
    client, headers, user_id, _ = authorized_client
    _create_profile(client, headers)

    listing = client.get("/api/profile")
    single = client.get(f"/api/profile/user/{user_id}")
    missing = client.get("/api/profile/user/999")

    assert listing.status_code == 200
    assert [p["user"]["id"] for p in listing.json()] == [user_id]
    assert single.status_code == 200
    assert single.json()["status"] == "Developer"
    assert missing.status_code == 400
    assert missing.json()["detail"] == "Profile not found"


def test_add_experience_prepends(authorized_client):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers)

    client.put("/api/profile/experience", json=EXPERIENCE_PAYLOAD, headers=headers)
    resp = client.put(
        "/api/profile/experience",
        json={**EXPERIENCE_PAYLOAD, "title": "Lead", "current": True},
        headers=headers,
    )

    assert resp.status_code == 200
    experience = resp.json()["experience"]
    assert [e["title"] for e in experience] == ["Lead", "Engineer"]
    assert experience[0]["current"] is True
    assert experience[0]["to"] is None
    assert experience[1]["from"] == "2020-01-01"
    assert experience[1]["to"] == "2021-06-30"


def test_add_experience_reports_missing_fields(authorized_client):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers)

    payload = {key: value for key, value in EXPERIENCE_PAYLOAD.items() if key != "company"}
    resp = client.put("/api/profile/experience", json=payload, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["errors"] == [
        {"msg": "Company is required", "param": "company", "location": "body"}
    ]


def test_add_experience_without_profile(authorized_client):
    client, headers, _, _ = authorized_client

    resp = client.put("/api/profile/experience", json=EXPERIENCE_PAYLOAD, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "There is no profile for this user"


def test_remove_experience(authorized_client):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers)
    exp_id = client.put(
        "/api/profile/experience", json=EXPERIENCE_PAYLOAD, headers=headers
    ).json()["experience"][0]["id"]

    resp = client.delete(f"/api/profile/experience/{exp_id}", headers=headers)

    assert resp.status_code == 200
    assert resp.json()["experience"] == []


def test_remove_unknown_experience_leaves_profile_unchanged(authorized_client):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers)
    before = client.put("/api/profile/experience", json=EXPERIENCE_PAYLOAD, headers=headers).json()

    resp = client.delete("/api/profile/experience/9999", headers=headers)

    assert resp.status_code == 200
    assert resp.json()["experience"] == before["experience"]


def test_education_lifecycle(authorized_client):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers)
    payload = {
        "school": "State University",
        "degree": "BSc",
        "fieldofstudy": "Computer Science",
        "from": "2012-09-01",
        "to": "2016-06-01",
    }

    added = client.put("/api/profile/education", json=payload, headers=headers)
    assert added.status_code == 200
    education = added.json()["education"]
    assert education[0]["school"] == "State University"

    removed = client.delete(f"/api/profile/education/{education[0]['id']}", headers=headers)
    assert removed.status_code == 200
    assert removed.json()["education"] == []


def test_add_education_reports_every_missing_field(authorized_client):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers)

    resp = client.put("/api/profile/education", json={"school": "MIT"}, headers=headers)

    assert resp.status_code == 400
    assert [(e["param"], e["msg"]) for e in resp.json()["errors"]] == [
        ("degree", "Degree is required"),
        ("fieldofstudy", "Field of study is required"),
        ("from", "From date is required"),
    ]


def test_delete_account_removes_everything(authorized_client, make_user, auth_headers):
    client, headers, user_id, session_factory = authorized_client
    _create_profile(client, headers)
    own_post = client.post("/api/posts", json={"text": "mine"}, headers=headers).json()

    other_headers = auth_headers(make_user("John Roe", "john@example.com"))
    other_post = client.post("/api/posts", json={"text": "theirs"}, headers=other_headers).json()
    client.put(f"/api/posts/like/{other_post['id']}", headers=headers)
    client.post(f"/api/posts/comment/{other_post['id']}", json={"text": "hey"}, headers=headers)
    client.put(f"/api/posts/like/{own_post['id']}", headers=other_headers)

    resp = client.delete("/api/profile", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {"msg": "User deleted"}
    session = session_factory()
    assert session.get(User, user_id) is None
    assert session.query(Profile).count() == 0
    assert [p.id for p in session.query(Post).all()] == [other_post["id"]]
    assert session.query(Like).count() == 0
    assert session.query(Comment).count() == 0
    session.close()

    assert client.get("/api/auth", headers=headers).status_code == 401


def test_github_repos_proxy(test_app_client, monkeypatch):
    client, _ = test_app_client
    repos = [{"name": "dotfiles", "html_url": "https://github.com/octocat/dotfiles"}]
    calls = []

    def fake_fetch(username, count=None):
        calls.append(username)
        return repos

    monkeypatch.setattr(github_api, "fetch_user_repos", fake_fetch)

    resp = client.get("/api/profile/github/octocat")

    assert resp.status_code == 200
    assert resp.json() == repos
    assert calls == ["octocat"]


@pytest.mark.parametrize(
    "error, status_code",
    [
        (UpstreamError(github_api.NO_GITHUB_PROFILE), 404),
        (UpstreamError("GitHub service unavailable", status_code=503), 503),
    ],
)
def test_github_repos_errors(test_app_client, monkeypatch, error, status_code):
    client, _ = test_app_client

    def fake_fetch(username, count=None):
        raise error

    monkeypatch.setattr(github_api, "fetch_user_repos", fake_fetch)

    resp = client.get("/api/profile/github/nobody")

    assert resp.status_code == status_code
    assert resp.json()["detail"] == error.detail


@pytest.mark.parametrize(
    "supplied, stored",
    [("x.com/a", "http://x.com/a"), ("https://x.com/a", "https://x.com/a")],
)
def test_social_link_read_back(authorized_client, supplied, stored):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers, {"status": "Developer", "skills": "go", "twitter": supplied})

    resp = client.get("/api/profile/me", headers=headers)

    assert resp.json()["social"]["twitter"] == stored


def test_malformed_user_id_is_profile_not_found(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/profile/user/abc")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Profile not found"


def test_malformed_experience_id_leaves_profile_unchanged(authorized_client):
    client, headers, _, _ = authorized_client
    _create_profile(client, headers)
    before = client.put("/api/profile/experience", json=EXPERIENCE_PAYLOAD, headers=headers).json()

    resp = client.delete("/api/profile/experience/abc", headers=headers)

    assert resp.status_code == 200
    assert resp.json()["experience"] == before["experience"]
