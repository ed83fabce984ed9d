"""
Chat domain models and schemas.

Dependencies: pydantic
System role: Chat API contracts
"""

import uuid

from pydantic import BaseModel, Field

from draftsmith.core.agentic_system.generation.schema import MarkupTarget


class ChatRequest(BaseModel):
    """Request schema for creating a project from a chat message."""

    message: str = Field(min_length=1, description="Job description or free-text request")
    kind: MarkupTarget = Field(default=MarkupTarget.RESUME, description="resume or email")


class ChatMessageResponse(BaseModel):
    """Single transcript entry."""

    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ChatCreateResponse(BaseModel):
    """A newly generated project."""

    project_id: uuid.UUID
    name: str
    kind: MarkupTarget
    markup: str


class ChatEditResponse(BaseModel):
    """Result of an edit request."""

    project_id: uuid.UUID
    markup: str
    summary: str
    messages: list[ChatMessageResponse]
