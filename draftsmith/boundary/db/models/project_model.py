"""
Project ORM model.

Holds a generated document's current markup, its chat transcript and the
last successfully compiled artifact.

Dependencies: sqlalchemy, draftsmith.boundary.db.base
System role: Project persistence for generation and compilation
"""

from sqlalchemy import JSON, Enum as SQLEnum, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from draftsmith.boundary.db.base import Base, TimestampMixin, UUIDMixin
from draftsmith.core.agentic_system.generation.schema import MarkupTarget


class ProjectModel(Base, UUIDMixin, TimestampMixin):
    """
    Project ORM model.

    chat_history is a list of {"role", "content"} dicts; it is always
    reassigned, never mutated in place, so SQLAlchemy detects the change.

    Attributes:
        user_id: Owning user
        name: Display name
        kind: resume (LaTeX, compiled) or email (plain text)
        markup: Current markup source
        chat_history: Transcript entries in order
        compiled_artifact: Last successful compiler output (PDF bytes)
    """

    __tablename__ = "projects"

    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    kind: Mapped[MarkupTarget] = mapped_column(
        SQLEnum(
            MarkupTarget,
            name="markup_target",
            native_enum=False,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=MarkupTarget.RESUME,
    )
    markup: Mapped[str] = mapped_column(Text, nullable=False, default="")
    chat_history: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    compiled_artifact: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
