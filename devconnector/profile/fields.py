"""
Normalization of the free-form profile payload.

Clients send a flat bag of optional keys (the social links sit next to the
profile fields). normalize_profile_fields() turns that bag into a
ProfileFields record where:

- blank strings count as "not supplied" and become None
- skills may arrive as a list or as a comma-separated string; entries are
  trimmed and blank entries dropped
- website and each social link gain an ``http://`` prefix when they carry
  no http(s) scheme, so ``x.com/a`` is stored as ``http://x.com/a`` and
  ``https://x.com/a`` is stored unchanged
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from devconnector.models import SOCIAL_NETWORKS

PROFILE_TEXT_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


@dataclass
class ProfileFields:
    """Normalized profile input. None means the caller did not supply the field."""

    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: list[str] | None = None
    social: dict[str, str] = field(default_factory=dict)

    def supplied(self) -> dict[str, Any]:
        """Return the supplied scalar and skills fields, ready to set on a Profile."""
        values: dict[str, Any] = {
            name: getattr(self, name)
            for name in PROFILE_TEXT_FIELDS
            if getattr(self, name) is not None
        }
        if self.skills is not None:
            values["skills"] = list(self.skills)
        return values


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def ensure_scheme(url: str | None) -> str | None:
    """Prefix ``http://`` unless the URL already starts with http:// or https://."""
    url = _clean(url)
    if url is None:
        return None
    if _SCHEME_RE.match(url):
        return url
    return f"http://{url}"


def split_skills(skills: str | Iterable[str] | None) -> list[str] | None:
    """Accept a list of skills or a comma-separated string."""
    if skills is None:
        return None
    if isinstance(skills, str):
        parts: Iterable[str] = skills.split(",")
    else:
        parts = skills
    cleaned = [part.strip() for part in parts if part and part.strip()]
    return cleaned or None


def normalize_profile_fields(raw: Mapping[str, Any]) -> ProfileFields:
    """Build a ProfileFields record from the raw request payload."""
    fields = ProfileFields(
        company=_clean(raw.get("company")),
        website=ensure_scheme(raw.get("website")),
        location=_clean(raw.get("location")),
        bio=_clean(raw.get("bio")),
        status=_clean(raw.get("status")),
        githubusername=_clean(raw.get("githubusername")),
        skills=split_skills(raw.get("skills")),
    )
    for network in SOCIAL_NETWORKS:
        link = ensure_scheme(raw.get(network))
        if link is not None:
            fields.social[network] = link
    return fields
