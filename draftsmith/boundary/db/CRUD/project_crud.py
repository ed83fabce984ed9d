"""
Project CRUD operations.

The core only reads and writes markup, appends transcript entries and
caches the compiled artifact. Writes that started from an older markup go
through conditional updates so they never clobber a newer edit.

Dependencies: sqlalchemy, draftsmith.boundary.db.models
System role: Project persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.boundary.db.CRUD.base_crud import BaseCRUD
from draftsmith.boundary.db.models.project_model import ProjectModel


class ProjectCRUD(BaseCRUD[ProjectModel]):
    """CRUD operations for ProjectModel."""

    def __init__(self) -> None:
        """Initialize ProjectCRUD with ProjectModel."""
        super().__init__(ProjectModel)

    async def get_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        project_id: UUID,
    ) -> ProjectModel | None:
        """Retrieve a project only if it belongs to the user."""
        stmt = select(ProjectModel).where(
            ProjectModel.id == project_id,
            ProjectModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user(self, session: AsyncSession, user_id: str) -> Sequence[ProjectModel]:
        stmt = (
            select(ProjectModel)
            .where(ProjectModel.user_id == user_id)
            .order_by(ProjectModel.updated_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def set_markup(
        self,
        session: AsyncSession,
        project: ProjectModel,
        markup: str,
    ) -> ProjectModel:
        """Replace the project's markup."""
        project.markup = markup
        await session.flush()
        return project

    async def append_messages(
        self,
        session: AsyncSession,
        project: ProjectModel,
        *messages: dict[str, str],
    ) -> ProjectModel:
        """
        Append transcript entries to the project's chat history.

        Args:
            session: Async database session
            project: Target project
            *messages: {"role": ..., "content": ...} entries in order

        Returns:
            Updated ProjectModel
        """
        project.chat_history = [*(project.chat_history or []), *messages]
        await session.flush()
        return project

    async def replace_markup(
        self,
        session: AsyncSession,
        project_id: UUID,
        expected: str,
        markup: str,
    ) -> bool:
        """
        Replace the markup only if it still equals `expected`.

        A single conditional UPDATE, so a writer that started from older
        markup cannot overwrite a newer edit made in another session.

        Returns:
            bool: True if the row was updated
        """
        stmt = (
            update(ProjectModel)
            .where(ProjectModel.id == project_id, ProjectModel.markup == expected)
            .values(markup=markup)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    async def cache_artifact(
        self,
        session: AsyncSession,
        project_id: UUID,
        markup: str,
        artifact: bytes,
    ) -> bool:
        """
        Store a compiled artifact only while `markup` is still the stored markup.

        Returns:
            bool: True if the artifact was stored
        """
        stmt = (
            update(ProjectModel)
            .where(ProjectModel.id == project_id, ProjectModel.markup == markup)
            .values(compiled_artifact=artifact)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount == 1


project_crud = ProjectCRUD()
