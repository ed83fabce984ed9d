"""
Structured profile schema.

Field names are snake_case in Python and camelCase on the wire and in
storage. Which fields a payload explicitly carried is tracked through
pydantic's model_fields_set, which the merger relies on.

Dependencies: pydantic
System role: Profile data contract
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _ProfilePart(BaseModel):
    """Shared config: camelCase aliases, lenient scalar coercion, nulls dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # Model output often carries numbers (years) and nulls for missing fields
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                value = str(value)
            cleaned[key] = value
        return cleaned


def _string_items(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    items = []
    for item in value:
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            items.append(str(item))
    return items


class ExperienceEntry(_ProfilePart):
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""


class EducationEntry(_ProfilePart):
    degree: str = ""
    institution: str = ""
    year: str = ""


class ProjectEntry(_ProfilePart):
    name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)

    @field_validator("technologies", mode="before")
    @classmethod
    def _coerce_technologies(cls, value: Any) -> Any:
        return _string_items(value)


class Profile(_ProfilePart):
    """
    A user's structured professional profile.

    raw_text holds the document corpus the profile was extracted from and
    is only ever written by the extraction path.
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    summary: str = ""
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    raw_text: str = ""

    @field_validator("skills", "certifications", "achievements", mode="before")
    @classmethod
    def _coerce_string_lists(cls, value: Any) -> Any:
        return _string_items(value)

    def to_storage(self) -> dict:
        """Serialize to the camelCase JSON payload stored per user."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_storage(cls, data: dict | None) -> "Profile":
        return cls.model_validate(data or {})


# Field names that a merge may take from an incoming payload
MERGEABLE_FIELDS: tuple[str, ...] = tuple(
    name for name in Profile.model_fields if name != "raw_text"
)
