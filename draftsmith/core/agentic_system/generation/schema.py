"""
Generation agent schemas.

Dependencies: pydantic
System role: Generation request/response definitions
"""

from enum import Enum

from pydantic import BaseModel, Field


class GenerationKind(str, Enum):
    CREATE = "create"
    EDIT = "edit"
    REPAIR = "repair"


class MarkupTarget(str, Enum):
    """What kind of document the markup is."""

    RESUME = "resume"
    EMAIL = "email"

    @property
    def compiles(self) -> bool:
        return self is MarkupTarget.RESUME


class GenerationRequest(BaseModel):
    """Ephemeral input to one generation call; never persisted."""

    kind: GenerationKind
    target: MarkupTarget = MarkupTarget.RESUME
    instruction: str = Field(description="Job description, edit request or compiler diagnostic")
    profile_text: str = Field(default="", description="Formatted profile block")
    context: str = Field(default="", description="Retrieved document text")
    current_markup: str | None = Field(default=None, description="Markup being edited or repaired")
    attachment_text: str | None = Field(default=None, description="Text of a document attached to an edit")


class GenerationResult(BaseModel):
    """Full replacement markup plus, for edits, a change summary."""

    markup: str
    summary: str | None = None


class EditResponse(BaseModel):
    """JSON shape the model must return for edits."""

    content: str = Field(min_length=1)
    summary: str = ""
