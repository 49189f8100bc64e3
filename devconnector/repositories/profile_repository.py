"""Developer profile repository."""

from datetime import date

from sqlalchemy.orm import joinedload

from devconnector.models import Education, Experience, Profile
from devconnector.models.base import utcnow
from devconnector.profile import ProfileFields

from .base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile operations."""

    model = Profile

    def get_by_user_id(self, user_id: int) -> Profile | None:
        """Get profile by user ID, with the owning user loaded."""
        return (
            self.session.query(Profile)
            .options(joinedload(Profile.user))
            .filter(Profile.user_id == user_id)
            .first()
        )

    def list_all(self) -> list[Profile]:
        """All profiles with their users, oldest first."""
        return (
            self.session.query(Profile)
            .options(joinedload(Profile.user))
            .order_by(Profile.id)
            .all()
        )

    def create_or_update(self, user_id: int, fields: ProfileFields) -> Profile:
        """
        Create or update a user's profile.
        Only updates fields that are supplied; social links are merged per network.
        """
        profile = self.get_by_user_id(user_id)
        values = fields.supplied()

        if profile:
            for key, value in values.items():
                setattr(profile, key, value)
            if fields.social:
                profile.social = {**(profile.social or {}), **fields.social}
            profile.updated_at = utcnow()
        else:
            profile = Profile(
                user_id=user_id,
                social=dict(fields.social),
                **{"skills": [], **values},
            )
            self.session.add(profile)

        self.session.flush()
        return profile

    def has_profile(self, user_id: int) -> bool:
        """Check if a user has a profile (efficient exists query)."""
        return self.exists_where(user_id=user_id)

    # Experience / education

    def add_experience(
        self,
        profile: Profile,
        title: str,
        company: str,
        from_date: date,
        location: str | None = None,
        to_date: date | None = None,
        current: bool = False,
        description: str | None = None,
    ) -> Experience:
        """Prepend an experience entry."""
        entry = Experience(
            title=title,
            company=company,
            location=location,
            from_date=from_date,
            to_date=None if current else to_date,
            current=current,
            description=description,
        )
        profile.experience.insert(0, entry)
        profile.updated_at = utcnow()
        self.session.flush()
        return entry

    def remove_experience(self, profile: Profile, exp_id: int) -> bool:
        """Remove the experience entry with the given ID. Returns False if absent."""
        for entry in profile.experience:
            if entry.id == exp_id:
                profile.experience.remove(entry)
                profile.updated_at = utcnow()
                self.session.flush()
                return True
        return False

    def add_education(
        self,
        profile: Profile,
        school: str,
        degree: str,
        fieldofstudy: str,
        from_date: date,
        to_date: date | None = None,
        current: bool = False,
        description: str | None = None,
    ) -> Education:
        """Prepend an education entry."""
        entry = Education(
            school=school,
            degree=degree,
            fieldofstudy=fieldofstudy,
            from_date=from_date,
            to_date=None if current else to_date,
            current=current,
            description=description,
        )
        profile.education.insert(0, entry)
        profile.updated_at = utcnow()
        self.session.flush()
        return entry

    def remove_education(self, profile: Profile, edu_id: int) -> bool:
        """Remove the education entry with the given ID. Returns False if absent."""
        for entry in profile.education:
            if entry.id == edu_id:
                profile.education.remove(entry)
                profile.updated_at = utcnow()
                self.session.flush()
                return True
        return False
