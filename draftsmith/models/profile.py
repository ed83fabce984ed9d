"""
Profile API models.

The profile body itself is draftsmith.core.profile.Profile (camelCase
aliases); this module only adds the response envelope.

Dependencies: pydantic
System role: Profile API contracts
"""

from pydantic import BaseModel

from draftsmith.core.profile import Profile


class ProfileResponse(BaseModel):
    profile: Profile | None
    formatted: str = ""
