"""
Pydantic schemas for request and response validation.

Request models declare every field optional: required-field checks happen
in the routers so missing values are reported as a 400 with one message per
field instead of pydantic's generic errors.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    msg: str


# =============================================================================
# Users / Auth
# =============================================================================


class TokenResponse(BaseModel):
    token: str


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime | None = Field(default=None, alias="date")


# =============================================================================
# Posts
# =============================================================================


class TextRequest(BaseModel):
    """Body of POST /posts and POST /posts/comment/{id}."""

    text: str | None = None


class LikeResponse(BaseModel):
    id: int
    user: int


class CommentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    user: int
    text: str
    name: str
    avatar: str | None = None
    created_at: datetime | None = Field(default=None, alias="date")


class PostResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    user: int
    text: str
    name: str
    avatar: str | None = None
    likes: list[LikeResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    created_at: datetime | None = Field(default=None, alias="date")


# =============================================================================
# Profiles
# =============================================================================


class ProfileRequest(BaseModel):
    """Flat profile payload; social links sit next to the profile fields."""

    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: list[str] | str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    company: str | None = None
    location: str | None = None
    from_date: date | None = Field(default=None, alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None


class EducationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: str | None = None
    degree: str | None = None
    fieldofstudy: str | None = None
    from_date: date | None = Field(default=None, alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None


class ProfileUser(BaseModel):
    id: int
    name: str
    avatar: str | None = None


class SocialLinks(BaseModel):
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    user: ProfileUser
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str
    githubusername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: SocialLinks = Field(default_factory=SocialLinks)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    created_at: datetime | None = Field(default=None, alias="date")


class ErrorItem(BaseModel):
    msg: str
    param: str | None = None
    location: str | None = None


class ErrorResponse(BaseModel):
    detail: str
    status_code: int
    errors: list[ErrorItem] | None = None


GitHubRepo = dict[str, Any]
