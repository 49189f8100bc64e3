"""
Domain exceptions.

Services raise these; the API layer renders them as JSON with the attached
status code. Anything else is treated as an unexpected server error.
"""

from typing import Any


class DevConnectorError(Exception):
    """Base class for errors reported to the caller."""

    status_code = 500

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class RequestValidationFailed(DevConnectorError):
    """One or more required fields are missing or empty."""

    status_code = 400

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__("Validation error")
        self.errors = errors

    @classmethod
    def single(cls, param: str, msg: str) -> "RequestValidationFailed":
        return cls([{"msg": msg, "param": param, "location": "body"}])


class NotFoundError(DevConnectorError):
    status_code = 404


class NoProfileError(DevConnectorError):
    """The caller has not created a profile yet."""

    status_code = 400

    def __init__(self, detail: str = "There is no profile for this user"):
        super().__init__(detail)


class NotAuthorizedError(DevConnectorError):
    status_code = 401

    def __init__(self, detail: str = "User not authorized"):
        super().__init__(detail)


class ConflictError(DevConnectorError):
    """The operation would violate a uniqueness rule (e.g. liking twice)."""

    status_code = 400


class ConcurrentUpdateError(DevConnectorError):
    """Another request modified the same document first."""

    status_code = 409

    def __init__(self, detail: str = "Resource was modified by another request, please retry"):
        super().__init__(detail)


class UpstreamError(DevConnectorError):
    """The external repository listing could not be used."""

    status_code = 404


__all__ = [
    "DevConnectorError",
    "RequestValidationFailed",
    "NotFoundError",
    "NoProfileError",
    "NotAuthorizedError",
    "ConflictError",
    "ConcurrentUpdateError",
    "UpstreamError",
]
