"""
Profile ORM model.

At most one row per user; the structured profile is stored as a JSON payload
in its camelCase wire shape.

Dependencies: sqlalchemy, draftsmith.boundary.db.base
System role: Profile persistence
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from draftsmith.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ProfileModel(Base, UUIDMixin, TimestampMixin):
    """
    Stored profile for a single user.

    Attributes:
        user_id: Owning user (unique)
        data: Profile JSON payload
    """

    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
