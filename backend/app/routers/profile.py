"""
Profile management endpoints.

Listing profiles, reading a profile by user and the GitHub repository
proxy are public; everything else acts on the caller's own profile.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devconnector.db import get_db
from devconnector.models import SOCIAL_NETWORKS, Education, Experience, Profile, User
from devconnector.profile import normalize_profile_fields

from ..auth.dependencies import get_current_user
from ..schemas import (
    EducationRequest,
    EducationResponse,
    ExperienceRequest,
    ExperienceResponse,
    GitHubRepo,
    MessageResponse,
    ProfileRequest,
    ProfileResponse,
    ProfileUser,
    SocialLinks,
)
from ..services import profile_service, user_service
from ..validation import check_not_empty

router = APIRouter(prefix="/profile", tags=["profile"])

PROFILE_RULES = {
    "status": "Status is required",
    "skills": "Skills are required",
}

EXPERIENCE_RULES = {
    "title": "Title is required",
    "company": "Company is required",
    "from_date": "From date is required",
}

EDUCATION_RULES = {
    "school": "School is required",
    "degree": "Degree is required",
    "fieldofstudy": "Field of study is required",
    "from_date": "From date is required",
}


def _experience_to_response(entry: Experience) -> ExperienceResponse:
    return ExperienceResponse(
        id=entry.id,
        title=entry.title,
        company=entry.company,
        location=entry.location,
        from_date=entry.from_date,
        to_date=entry.to_date,
        current=entry.current,
        description=entry.description,
    )


def _education_to_response(entry: Education) -> EducationResponse:
    return EducationResponse(
        id=entry.id,
        school=entry.school,
        degree=entry.degree,
        fieldofstudy=entry.fieldofstudy,
        from_date=entry.from_date,
        to_date=entry.to_date,
        current=entry.current,
        description=entry.description,
    )


def _profile_to_response(profile: Profile) -> ProfileResponse:
    """Convert Profile to response, joined with the owner's public fields."""
    social = profile.social or {}
    return ProfileResponse(
        id=profile.id,
        user=ProfileUser(id=profile.user.id, name=profile.user.name, avatar=profile.user.avatar),
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        status=profile.status,
        githubusername=profile.githubusername,
        skills=profile.skills or [],
        social=SocialLinks(**{network: social.get(network) for network in SOCIAL_NETWORKS}),
        experience=[_experience_to_response(entry) for entry in profile.experience],
        education=[_education_to_response(entry) for entry in profile.education],
        created_at=profile.created_at,
    )


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get current user's profile."""
    return _profile_to_response(profile_service.get_my_profile(db, current_user))


@router.post("", response_model=ProfileResponse)
def upsert_profile(
    payload: ProfileRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create or update the caller's profile.

    Skills may be a list or a comma-separated string. Links without an
    http(s) scheme are stored with ``http://`` prepended.
    """
    fields = normalize_profile_fields(payload.model_dump())
    check_not_empty(fields, PROFILE_RULES)
    profile = profile_service.upsert_profile(db, current_user, fields)
    return _profile_to_response(profile)


@router.get("", response_model=list[ProfileResponse])
def list_profiles(db: Session = Depends(get_db)):
    """All profiles (public)."""
    return [_profile_to_response(profile) for profile in profile_service.list_profiles(db)]


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user(user_id: str, db: Session = Depends(get_db)):
    """Profile of the given user (public)."""
    return _profile_to_response(profile_service.get_profile_by_user(db, user_id))


@router.delete("", response_model=MessageResponse)
def delete_account(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the caller's profile and account, including their posts."""
    user_service.delete_account(db, current_user)
    return MessageResponse(msg="User deleted")


@router.put("/experience", response_model=ProfileResponse)
def add_experience(
    payload: ExperienceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    check_not_empty(payload, EXPERIENCE_RULES)
    profile = profile_service.add_experience(db, current_user, payload)
    return _profile_to_response(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
def remove_experience(
    exp_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    profile = profile_service.remove_experience(db, current_user, exp_id)
    return _profile_to_response(profile)


@router.put("/education", response_model=ProfileResponse)
def add_education(
    payload: EducationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    check_not_empty(payload, EDUCATION_RULES)
    profile = profile_service.add_education(db, current_user, payload)
    return _profile_to_response(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
def remove_education(
    edu_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    profile = profile_service.remove_education(db, current_user, edu_id)
    return _profile_to_response(profile)


@router.get("/github/{username}", response_model=list[GitHubRepo])
def get_github_repos(username: str):
    """Latest public repositories of a GitHub user (public)."""
    return profile_service.get_github_repos(username)
