"""
Generation service orchestrator.

Create flow: profile -> per-request retrieval -> generate -> new project.
Edit flow: optional attachment text -> full-replacement edit -> transcript.

Dependencies: draftsmith.core.agentic_system, draftsmith.core.retrieval,
              draftsmith.application.services.profile_service
System role: Chat-driven project generation
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.application.services.profile_service import ProfileService
from draftsmith.boundary.db.CRUD.project_crud import ProjectCRUD, project_crud
from draftsmith.boundary.db.models.project_model import ProjectModel
from draftsmith.core.agentic_system.generation.agent import GenerationAgent
from draftsmith.core.agentic_system.generation.schema import MarkupTarget
from draftsmith.core.document_processing.tasks import ExtractionTask
from draftsmith.core.exceptions import MarkupConflictError, ProjectNotFoundError, ValidationError
from draftsmith.core.profile import Profile, format_profile_for_prompt
from draftsmith.core.retrieval import ContextRetriever

logger = logging.getLogger(__name__)


@dataclass
class Attachment:
    """A document attached to an edit request."""

    data: bytes
    media_type: str
    name: str = ""


def project_name(target: MarkupTarget, message: str, profile: Profile | None) -> str:
    """Name a new project after the profile's owner, or after the request."""
    if profile is not None and profile.full_name:
        return f"{profile.full_name} - {message[:30]}..."
    label = "Resume" if target is MarkupTarget.RESUME else "Email"
    return f"{label}: {message[:50]}..."


class GenerationService:
    """Create and edit projects through the generation agent."""

    def __init__(
        self,
        db: AsyncSession,
        agent: GenerationAgent,
        retriever: ContextRetriever,
        profile_service: ProfileService,
        extraction_task: ExtractionTask | None = None,
        crud: ProjectCRUD | None = None,
    ) -> None:
        self.db = db
        self.agent = agent
        self.retriever = retriever
        self.profile_service = profile_service
        self.extraction_task = extraction_task or ExtractionTask()
        self._crud = crud or project_crud

    async def create_project(
        self,
        user_id: str,
        message: str,
        target: MarkupTarget = MarkupTarget.RESUME,
    ) -> ProjectModel:
        """
        Generate markup from scratch and store it as a new project.

        Steps:
        1. Load the stored profile (extract one if none is stored)
        2. Retrieve context with the message as the query
        3. Generate markup
        4. Create the project with the user message as its first transcript entry

        Args:
            user_id: Requesting user
            message: Job description or free-text request
            target: resume or email

        Returns:
            ProjectModel: The created project

        Raises:
            ValidationError: If the message is blank
            LLMInvocationError: If the model call failed terminally
            GenerationError: If the model returned no usable markup
        """
        if not message.strip():
            raise ValidationError("message must not be empty", field="message")

        profile = await self.profile_service.get_or_extract(user_id)
        profile_text = format_profile_for_prompt(profile) if profile is not None else ""
        context = await self.retriever.retrieve(self.db, user_id, message)

        markup = await self.agent.create(
            message,
            target=target,
            profile_text=profile_text,
            context=context,
        )

        project = await self._crud.create(
            self.db,
            user_id=user_id,
            name=project_name(target, message, profile),
            kind=target,
            markup=markup,
            chat_history=[{"role": "user", "content": message}],
        )
        logger.info(
            f"{__name__}:create_project - Project created",
            extra={
                "user_id": user_id,
                "project_id": str(project.id),
                "target": target.value,
                "has_profile": profile is not None,
                "context_chars": len(context),
            },
        )
        return project

    async def edit_project(
        self,
        user_id: str,
        project_id: UUID,
        message: str,
        attachment: Attachment | None = None,
    ) -> tuple[ProjectModel, str]:
        """
        Apply an edit request to a project's markup.

        Args:
            user_id: Requesting user
            project_id: Project to edit
            message: Edit instruction
            attachment: Optional document whose text is inlined as context

        Returns:
            tuple[ProjectModel, str]: Updated project and the change summary

        Raises:
            ProjectNotFoundError: If the project does not exist for this user
            ParseError: If the model's JSON answer could not be decoded
            MarkupConflictError: If the markup changed while the edit was generated
        """
        if not message.strip():
            raise ValidationError("message must not be empty", field="message")

        project = await self._crud.get_for_user(self.db, user_id, project_id)
        if project is None:
            raise ProjectNotFoundError(str(project_id))

        attachment_text = None
        if attachment is not None:
            text = await self.extraction_task.extract(attachment.data, attachment.media_type)
            attachment_text = text or None
            if attachment_text is None:
                logger.warning(
                    f"{__name__}:edit_project - Attachment yielded no text",
                    extra={"attachment": attachment.name, "media_type": attachment.media_type},
                )

        source = project.markup
        result = await self.agent.edit(
            source,
            message,
            target=project.kind,
            attachment_text=attachment_text,
        )
        summary = result.summary or ""

        if not await self._crud.replace_markup(self.db, project.id, source, result.markup):
            raise MarkupConflictError(str(project_id))
        await self._crud.append_messages(
            self.db,
            project,
            {"role": "user", "content": message},
            {"role": "assistant", "content": summary},
        )
        await self.db.commit()
        logger.info(
            f"{__name__}:edit_project - Project edited",
            extra={"user_id": user_id, "project_id": str(project_id), "has_attachment": attachment is not None},
        )
        return project, summary
