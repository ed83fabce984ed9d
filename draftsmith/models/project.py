"""
Project compilation models and schemas.

Dependencies: pydantic
System role: Project API contracts
"""

import uuid

from pydantic import BaseModel, Field

from draftsmith.core.compilation import CompileState


class MarkupUpdateRequest(BaseModel):
    """Edited markup from the editor."""

    markup: str


class MarkupUpdateResponse(BaseModel):
    project_id: uuid.UUID
    compile_scheduled: bool


class CompileFailureResponse(BaseModel):
    """Body of a failed compile or repair."""

    success: bool = False
    state: CompileState
    diagnostic: str = Field(description="Compiler output, truncated")
    repaired: bool = Field(description="A repair ran during this request")
    compiler_unavailable: bool = False
    superseded: bool = False
    retry_count: int
    gave_up: bool


class CompileStatusResponse(BaseModel):
    """Repair loop snapshot for a project."""

    project_id: uuid.UUID
    state: CompileState
    retry_count: int
    auto_repairs_used: int
    max_repair_attempts: int
    last_diagnostic: str | None = None
    gave_up: bool
    pending_compile: bool
    has_artifact: bool
