"""
Compilation loop models.

Dependencies: pydantic
System role: Repair loop state and attempt records
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class CompileState(str, Enum):
    IDLE = "idle"
    COMPILING = "compiling"
    SUCCESS = "success"
    FAILED = "failed"
    REPAIRING = "repairing"
    RECOMPILING = "recompiling"


class CompilationAttempt(BaseModel):
    """One compile call inside a repair cycle; discarded when the next cycle starts."""

    attempt: int = Field(ge=1)
    markup: str
    repaired: bool = Field(default=False, description="Markup came from a repair")
    artifact: bytes | None = None
    diagnostic: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def succeeded(self) -> bool:
        return self.artifact is not None


class CompileOutcome(BaseModel):
    """Result of a compile or repair request."""

    state: CompileState
    markup: str = Field(description="Markup that was last compiled (repaired if a repair ran)")
    artifact: bytes | None = None
    diagnostic: str | None = None
    repaired: bool = False
    compiler_unavailable: bool = False
    superseded: bool = Field(
        default=False,
        description="The repaired markup was discarded because the project was edited meanwhile",
    )

    @property
    def succeeded(self) -> bool:
        return self.artifact is not None


class CompileStatus(BaseModel):
    """Snapshot of a project's repair loop."""

    state: CompileState
    retry_count: int
    auto_repairs_used: int
    max_repair_attempts: int
    last_diagnostic: str | None = None
    gave_up: bool = False
    pending_compile: bool = False
    episode: int = 0
    attempts: int = 0
