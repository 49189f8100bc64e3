# Profile field normalization

from .fields import (
    PROFILE_TEXT_FIELDS,
    ProfileFields,
    ensure_scheme,
    normalize_profile_fields,
    split_skills,
)

__all__ = [
    "PROFILE_TEXT_FIELDS",
    "ProfileFields",
    "ensure_scheme",
    "normalize_profile_fields",
    "split_skills",
]
