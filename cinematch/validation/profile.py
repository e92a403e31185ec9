"""Edit-profile form."""
from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ..schemas import UpdateUserRequest
from ..utils.dates import format_input_date
from .base import validate_form

MINIMUM_AGE = 13


def _years_before(today: date, years: int) -> date:
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return today.replace(year=today.year - years, day=28)


class ProfileForm(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: str
    bio: str = ""
    birthdate: date

    @field_validator("display_name")
    @classmethod
    def display_name_length(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("Display name is required")
        if len(text) < 2:
            raise ValueError("Display name must be at least 2 characters")
        if len(text) > 50:
            raise ValueError("Display name must be less than 50 characters")
        return text

    @field_validator("bio", mode="before")
    @classmethod
    def bio_length(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str) and len(value) > 500:
            raise ValueError("Bio must be less than 500 characters")
        return value

    @field_validator("birthdate")
    @classmethod
    def old_enough(cls, value: date) -> date:
        today = date.today()
        if value > today:
            raise ValueError("Birth date cannot be in the future")
        if value > _years_before(today, MINIMUM_AGE):
            raise ValueError(f"You must be at least {MINIMUM_AGE} years old")
        return value

    def to_update_request(self) -> UpdateUserRequest:
        return UpdateUserRequest(
            display_name=self.display_name,
            bio=self.bio,
            birthdate=format_input_date(self.birthdate),
        )


def validate_profile_form(data: Mapping[str, Any]) -> tuple[ProfileForm | None, dict[str, str]]:
    return validate_form(ProfileForm, data)


__all__ = ["ProfileForm", "validate_profile_form", "MINIMUM_AGE"]
