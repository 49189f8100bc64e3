"""
Profile management service functions.
"""

from sqlalchemy.orm import Session

# Import modules (not functions) to allow test patching
from devconnector import github_api
from devconnector.exceptions import NotFoundError, NoProfileError
from devconnector.logging import get_logger
from devconnector.models import Profile, User
from devconnector.profile import ProfileFields
from devconnector.repositories import ProfileRepository

from ..schemas import EducationRequest, ExperienceRequest
from ..validation import parse_id

logger = get_logger("api.profile_service")


def get_my_profile(db: Session, user: User) -> Profile:
    """The caller's profile, or NoProfileError."""
    profile = ProfileRepository(db).get_by_user_id(user.id)
    if profile is None:
        raise NoProfileError()
    return profile


def list_profiles(db: Session) -> list[Profile]:
    return ProfileRepository(db).list_all()


def get_profile_by_user(db: Session, user_id: int | str) -> Profile:
    uid = parse_id(user_id)
    profile = ProfileRepository(db).get_by_user_id(uid) if uid is not None else None
    if profile is None:
        # Reported as 400 like the other profile lookups
        raise NotFoundError("Profile not found", status_code=400)
    return profile


def upsert_profile(db: Session, user: User, fields: ProfileFields) -> Profile:
    """
    Create the caller's profile, or merge the supplied fields into it.

    Fields left as None in ``fields`` keep their stored value.
    """
    repo = ProfileRepository(db)
    is_new = not repo.has_profile(user.id)
    profile = repo.create_or_update(user.id, fields)
    db.commit()
    db.refresh(profile)
    logger.info("profile_saved", user_id=user.id, created=is_new)
    return profile


def add_experience(db: Session, user: User, payload: ExperienceRequest) -> Profile:
    profile = get_my_profile(db, user)
    entry = ProfileRepository(db).add_experience(
        profile,
        title=payload.title.strip(),
        company=payload.company.strip(),
        location=payload.location,
        from_date=payload.from_date,
        to_date=payload.to_date,
        current=payload.current,
        description=payload.description,
    )
    db.commit()
    logger.info("experience_added", user_id=user.id, experience_id=entry.id)
    return profile


def remove_experience(db: Session, user: User, exp_id: int | str) -> Profile:
    """Remove an experience entry. An unknown id leaves the profile unchanged."""
    profile = get_my_profile(db, user)
    entry_id = parse_id(exp_id)
    if entry_id is not None and ProfileRepository(db).remove_experience(profile, entry_id):
        db.commit()
        logger.info("experience_removed", user_id=user.id, experience_id=exp_id)
    else:
        logger.info("experience_not_found", user_id=user.id, experience_id=exp_id)
    return profile


def add_education(db: Session, user: User, payload: EducationRequest) -> Profile:
    profile = get_my_profile(db, user)
    entry = ProfileRepository(db).add_education(
        profile,
        school=payload.school.strip(),
        degree=payload.degree.strip(),
        fieldofstudy=payload.fieldofstudy.strip(),
        from_date=payload.from_date,
        to_date=payload.to_date,
        current=payload.current,
        description=payload.description,
    )
    db.commit()
    logger.info("education_added", user_id=user.id, education_id=entry.id)
    return profile


def remove_education(db: Session, user: User, edu_id: int | str) -> Profile:
    """Remove an education entry. An unknown id leaves the profile unchanged."""
    profile = get_my_profile(db, user)
    entry_id = parse_id(edu_id)
    if entry_id is not None and ProfileRepository(db).remove_education(profile, entry_id):
        db.commit()
        logger.info("education_removed", user_id=user.id, education_id=edu_id)
    else:
        logger.info("education_not_found", user_id=user.id, education_id=edu_id)
    return profile


def get_github_repos(username: str) -> list[dict]:
    """Latest public repositories for a GitHub user."""
    return github_api.fetch_user_repos(username)
