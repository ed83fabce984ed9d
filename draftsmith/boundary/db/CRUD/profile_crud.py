"""
Profile CRUD operations.

Dependencies: sqlalchemy, draftsmith.boundary.db.models
System role: Profile persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.boundary.db.CRUD.base_crud import BaseCRUD
from draftsmith.boundary.db.models.profile_model import ProfileModel


class ProfileCRUD(BaseCRUD[ProfileModel]):
    """CRUD operations for ProfileModel keyed by user."""

    def __init__(self) -> None:
        """Initialize ProfileCRUD with ProfileModel."""
        super().__init__(ProfileModel)

    async def get_by_user(self, session: AsyncSession, user_id: str) -> ProfileModel | None:
        """
        Retrieve the stored profile row for a user.

        Args:
            session: Async database session
            user_id: Owning user

        Returns:
            ProfileModel if one exists, None otherwise
        """
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, session: AsyncSession, user_id: str, data: dict) -> ProfileModel:
        """
        Replace the user's profile payload, creating the row if absent.

        Callers pass an already-merged payload; this method never merges.

        Args:
            session: Async database session
            user_id: Owning user
            data: Complete profile JSON payload

        Returns:
            Stored ProfileModel
        """
        existing = await self.get_by_user(session, user_id)
        if existing is None:
            return await self.create(session, user_id=user_id, data=data)
        existing.data = data
        await session.flush()
        return existing


profile_crud = ProfileCRUD()
