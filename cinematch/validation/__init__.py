"""Client-side form validation."""
from .base import field_errors, validate_form
from .profile import ProfileForm, validate_profile_form
from .review import ReviewForm, initial_review_values, validate_review_form

__all__ = [
    "field_errors",
    "validate_form",
    "ProfileForm",
    "validate_profile_form",
    "ReviewForm",
    "initial_review_values",
    "validate_review_form",
]
