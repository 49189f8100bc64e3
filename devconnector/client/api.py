"""HTTP client for the DevConnector REST API."""

from typing import Any

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    """A non-2xx response, reduced to what the state container needs."""

    def __init__(self, msg: str, status: int, errors: list[dict] | None = None):
        super().__init__(msg)
        self.msg = msg
        self.status = status
        self.errors = errors or []

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        msg = body.get("detail") or response.reason_phrase or "Request failed"
        return cls(str(msg), response.status_code, body.get("errors"))

    @property
    def messages(self) -> list[str]:
        """One message per validation error, or the overall message."""
        return [error["msg"] for error in self.errors if error.get("msg")] or [self.msg]


class ApiClient:
    """
    Thin wrapper over httpx.Client that keeps the bearer token.

    Any httpx.Client works as transport, including FastAPI's TestClient.
    """

    def __init__(self, http: httpx.Client | None = None, base_url: str = DEFAULT_BASE_URL):
        self.http = http or httpx.Client(base_url=base_url, timeout=10.0)
        self.token: str | None = None

    def set_auth_token(self, token: str | None) -> None:
        self.token = token
        if token:
            self.http.headers["Authorization"] = f"Bearer {token}"
        else:
            self.http.headers.pop("Authorization", None)

    def request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = self.http.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise ApiError(f"Network error: {e}", 0) from e
        if response.is_error:
            raise ApiError.from_response(response)
        return response.json()

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
