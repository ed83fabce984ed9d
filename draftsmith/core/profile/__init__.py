"""
Structured profile: schema, extraction, merging and prompt formatting.
"""

from draftsmith.core.profile.formatter import format_profile, format_profile_for_prompt
from draftsmith.core.profile.merger import merge, merge_extracted
from draftsmith.core.profile.schema import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProjectEntry,
)

__all__ = [
    "EducationEntry",
    "ExperienceEntry",
    "Profile",
    "ProjectEntry",
    "format_profile",
    "format_profile_for_prompt",
    "merge",
    "merge_extracted",
]
