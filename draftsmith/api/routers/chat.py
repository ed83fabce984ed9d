"""
Chat API endpoints.

Routes: POST /chat, POST /chat/edit

Dependencies: draftsmith.application.services, draftsmith.models
System role: Generation HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from draftsmith.api.deps import get_compile_service, get_generation_service, get_user_id
from draftsmith.api.routers.documents import resolve_media_type
from draftsmith.application.services import Attachment, CompileService, GenerationService
from draftsmith.models.chat import (
    ChatCreateResponse,
    ChatEditResponse,
    ChatMessageResponse,
    ChatRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_from_chat(
    request: ChatRequest,
    user_id: str = Depends(get_user_id),
    service: GenerationService = Depends(get_generation_service),
) -> ChatCreateResponse:
    """Generate a new resume or email project from a job description."""
    project = await service.create_project(user_id, request.message, request.kind)
    return ChatCreateResponse(
        project_id=project.id,
        name=project.name,
        kind=project.kind,
        markup=project.markup,
    )


@router.post("/edit", response_model=ChatEditResponse)
async def edit_from_chat(
    project_id: UUID = Form(...),
    message: str = Form(...),
    attachment: UploadFile | None = File(default=None),
    user_id: str = Depends(get_user_id),
    service: GenerationService = Depends(get_generation_service),
    compile_service: CompileService = Depends(get_compile_service),
) -> ChatEditResponse:
    """
    Apply an edit request to a project.

    An attached document's text is inlined as extra context. Resume
    projects get a debounced recompile of the new markup.
    """
    attached = None
    if attachment is not None and attachment.filename:
        attached = Attachment(
            data=await attachment.read(),
            media_type=resolve_media_type(attachment),
            name=attachment.filename,
        )

    project, summary = await service.edit_project(user_id, project_id, message, attached)
    compile_service.schedule_compile(project)

    return ChatEditResponse(
        project_id=project.id,
        markup=project.markup,
        summary=summary,
        messages=[ChatMessageResponse(**entry) for entry in project.chat_history],
    )
