"""
Compile service orchestrator.

One RepairLoopController per project lives for the whole process, so the
debounce timer, failure episode and repair counters survive across
requests. Controllers persist repaired markup and compiled artifacts in
their own sessions because debounced compiles run after the request that
scheduled them has finished. Both writes are conditional on the markup
they were derived from still being stored, so an edit made while a
repair runs is kept and the cached artifact always matches the markup.

Dependencies: draftsmith.core.compilation, draftsmith.boundary.db
System role: Project compilation orchestration
"""

import asyncio
import logging
from functools import partial
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from draftsmith.boundary.db.CRUD.project_crud import ProjectCRUD, project_crud
from draftsmith.boundary.db.models.project_model import ProjectModel
from draftsmith.configs.compiler import CompilerSettings
from draftsmith.core.compilation import CompileOutcome, CompileStatus, RepairLoopController
from draftsmith.core.compilation.repair_loop import Compiler, Repairer
from draftsmith.core.exceptions import ProjectNotFoundError, ValidationError

logger = logging.getLogger(__name__)

REPAIR_NOTE = "Fixed a compilation error in the document."


class RepairControllers:
    """
    Process-wide registry of per-project repair loop controllers.

    Past `controller_cache_size` entries, idle controllers are evicted, so
    the registry holds at most that many plus the projects that are
    compiling or have an unresolved failure.
    """

    def __init__(
        self,
        compiler: Compiler,
        repairer: Repairer,
        settings: CompilerSettings,
        session_factory: async_sessionmaker,
        crud: ProjectCRUD | None = None,
    ) -> None:
        self._compiler = compiler
        self._repairer = repairer
        self._settings = settings
        self._session_factory = session_factory
        self._crud = crud or project_crud
        self._controllers: dict[UUID, RepairLoopController] = {}

    def __len__(self) -> int:
        return len(self._controllers)

    def get(self, project_id: UUID) -> RepairLoopController:
        controller = self._controllers.get(project_id)
        if controller is None:
            if len(self._controllers) >= self._settings.controller_cache_size:
                self._evict_idle()
            controller = RepairLoopController(
                project_id=str(project_id),
                compiler=self._compiler,
                repairer=self._repairer,
                settings=self._settings,
                on_repaired=partial(self._store_repair, project_id),
                on_compiled=partial(self._store_artifact, project_id),
            )
            self._controllers[project_id] = controller
        return controller

    def _evict_idle(self) -> None:
        # Idle: nothing running or scheduled and no unresolved failure
        idle = [pid for pid, c in self._controllers.items() if c.is_idle]
        for pid in idle:
            del self._controllers[pid]
        if idle:
            logger.debug(
                f"{__name__}:_evict_idle - Evicted idle repair controllers",
                extra={"evicted": len(idle), "remaining": len(self._controllers)},
            )

    async def shutdown(self) -> None:
        """Cancel pending debounced compiles and forget every controller."""
        controllers = list(self._controllers.values())
        self._controllers.clear()
        await asyncio.gather(*(c.shutdown() for c in controllers))

    async def _store_repair(
        self, project_id: UUID, source: str, markup: str, diagnostic: str
    ) -> bool:
        async with self._session_factory() as session:
            applied = await self._crud.replace_markup(session, project_id, source, markup)
            if not applied:
                logger.info(
                    f"{__name__}:_store_repair - Project edited during repair, discarding repair",
                    extra={"project_id": str(project_id)},
                )
                return False
            project = await self._crud.get_by_id(session, project_id)
            await self._crud.append_messages(
                session, project, {"role": "assistant", "content": REPAIR_NOTE}
            )
            await session.commit()
            return True

    async def _store_artifact(self, project_id: UUID, markup: str, artifact: bytes) -> None:
        async with self._session_factory() as session:
            stored = await self._crud.cache_artifact(session, project_id, markup, artifact)
            await session.commit()
        if not stored:
            logger.info(
                f"{__name__}:_store_artifact - Markup changed since compile, artifact not cached",
                extra={"project_id": str(project_id)},
            )


class CompileService:
    """Compile, repair and track compilation of a user's projects."""

    def __init__(
        self,
        db: AsyncSession,
        controllers: RepairControllers,
        crud: ProjectCRUD | None = None,
    ) -> None:
        """
        Initialize compile service.

        Args:
            db: AsyncSession for project lookups and markup writes
            controllers: Process-wide controller registry
            crud: Project CRUD (defaults to the module singleton)
        """
        self.db = db
        self.controllers = controllers
        self._crud = crud or project_crud

    async def compile_project(self, user_id: str, project_id: UUID) -> CompileOutcome:
        """
        Compile the project's current markup now, with one automatic repair.

        Returns:
            CompileOutcome: SUCCESS with the artifact, or FAILED with a diagnostic

        Raises:
            ProjectNotFoundError: If the project does not exist for this user
            ValidationError: If the project is not a compiled kind
        """
        project = await self._load(user_id, project_id, require_compiled=True)
        return await self.controllers.get(project.id).compile(project.markup)

    async def repair_project(self, user_id: str, project_id: UUID) -> CompileOutcome:
        """
        Repair the last compile failure on user request and recompile.

        Raises:
            ValidationError: If there is no failure to repair
            RepairLimitError: If the episode's repair ceiling is reached
        """
        project = await self._load(user_id, project_id, require_compiled=True)
        return await self.controllers.get(project.id).repair(project.markup)

    async def update_markup(self, user_id: str, project_id: UUID, markup: str) -> ProjectModel:
        """
        Store edited markup and schedule a debounced compile.

        Email projects store the markup and are never compiled.

        Returns:
            ProjectModel: Updated project
        """
        project = await self._load(user_id, project_id, require_compiled=False)
        await self._crud.set_markup(self.db, project, markup)
        await self.db.commit()

        if project.kind.compiles:
            self.controllers.get(project.id).schedule_compile(markup)
        return project

    def schedule_compile(self, project: ProjectModel) -> None:
        """Schedule a debounced compile of an already stored project."""
        if project.kind.compiles:
            self.controllers.get(project.id).schedule_compile(project.markup)

    async def get_status(self, user_id: str, project_id: UUID) -> tuple[CompileStatus, bytes | None]:
        """
        Report the controller state and the cached artifact.

        Returns:
            tuple[CompileStatus, bytes | None]: Status snapshot and last good artifact
        """
        project = await self._load(user_id, project_id, require_compiled=True)
        status = self.controllers.get(project.id).status()
        return status, project.compiled_artifact

    async def _load(self, user_id: str, project_id: UUID, require_compiled: bool) -> ProjectModel:
        project = await self._crud.get_for_user(self.db, user_id, project_id)
        if project is None:
            raise ProjectNotFoundError(str(project_id))
        if require_compiled and not project.kind.compiles:
            raise ValidationError(
                f"{project.kind.value} projects are not compiled",
                field="project_id",
            )
        return project
