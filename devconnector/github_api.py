"""GitHub REST client for listing a user's public repositories."""

from urllib.parse import quote

import requests  # type: ignore[import-untyped]

from devconnector.config import get_settings
from devconnector.exceptions import UpstreamError
from devconnector.logging import get_logger

logger = get_logger("github")

NO_GITHUB_PROFILE = "No Github profile found"


def _get_headers() -> dict[str, str]:
    """Get headers for GitHub API requests."""
    token = get_settings().github_token
    headers = {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": "DevConnector/1.0",
    }
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def fetch_user_repos(username: str, count: int | None = None) -> list[dict]:
    """
    Fetch the most recently created public repositories of a GitHub user.

    Args:
        username: GitHub login.
        count: Number of repositories to return; defaults to settings.github_repo_count.

    Returns:
        The repository objects exactly as GitHub returns them.

    Raises:
        UpstreamError: 404 when GitHub answers with anything but 200,
            503 when GitHub cannot be reached.
    """
    settings = get_settings()
    url = f"{settings.github_api_base.rstrip('/')}/users/{quote(username, safe='')}/repos"
    params = {
        "per_page": count or settings.github_repo_count,
        "sort": "created",
        "direction": "asc",
    }

    try:
        response = requests.get(
            url, headers=_get_headers(), params=params, timeout=settings.github_timeout
        )
    except requests.RequestException as e:
        logger.error("request_exception", error=str(e), username=username)
        raise UpstreamError("GitHub service unavailable", status_code=503) from e

    if response.status_code != 200:
        logger.info("github_profile_not_found", username=username, status=response.status_code)
        raise UpstreamError(NO_GITHUB_PROFILE)

    return response.json()


__all__ = ["fetch_user_repos", "NO_GITHUB_PROFILE"]
