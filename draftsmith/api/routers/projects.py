"""
Project compilation API endpoints.

Routes: POST /projects/{id}/compile, PUT /projects/{id}/markup,
        POST /projects/{id}/repair, GET /projects/{id}/compile-status,
        GET /projects/{id}/artifact

Dependencies: draftsmith.application.services, draftsmith.core.compilation
System role: Compilation HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from draftsmith.api.deps import get_compile_service, get_user_id
from draftsmith.application.services import CompileService
from draftsmith.configs import Settings, get_settings
from draftsmith.core.compilation import CompileOutcome, CompileStatus
from draftsmith.models.project import (
    CompileFailureResponse,
    CompileStatusResponse,
    MarkupUpdateRequest,
    MarkupUpdateResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])

PDF_MEDIA_TYPE = "application/pdf"


def clip_diagnostic(diagnostic: str | None, limit: int) -> str | None:
    """Cut compiler output to the excerpt length shown to users and the repair prompt."""
    return diagnostic[:limit] if diagnostic is not None else None


def outcome_response(
    outcome: CompileOutcome,
    status_snapshot: CompileStatus,
    excerpt_chars: int,
) -> Response:
    """PDF bytes on success; 422 (or 503 when unreachable) with the clipped diagnostic otherwise."""
    if outcome.succeeded:
        return Response(
            content=outcome.artifact,
            media_type=PDF_MEDIA_TYPE,
            headers={"X-Repaired": str(outcome.repaired).lower()},
        )
    body = CompileFailureResponse(
        state=outcome.state,
        diagnostic=clip_diagnostic(outcome.diagnostic or "", excerpt_chars),
        repaired=outcome.repaired,
        compiler_unavailable=outcome.compiler_unavailable,
        superseded=outcome.superseded,
        retry_count=status_snapshot.retry_count,
        gave_up=status_snapshot.gave_up,
    )
    code = (
        status.HTTP_503_SERVICE_UNAVAILABLE
        if outcome.compiler_unavailable
        else status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"))


@router.post("/{project_id}/compile")
async def compile_project(
    project_id: UUID,
    user_id: str = Depends(get_user_id),
    service: CompileService = Depends(get_compile_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Compile now; one automatic repair runs on the first failure of an episode."""
    outcome = await service.compile_project(user_id, project_id)
    snapshot = service.controllers.get(project_id).status()
    return outcome_response(outcome, snapshot, settings.compiler.error_excerpt_chars)


@router.put(
    "/{project_id}/markup",
    response_model=MarkupUpdateResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def update_markup(
    project_id: UUID,
    request: MarkupUpdateRequest,
    user_id: str = Depends(get_user_id),
    service: CompileService = Depends(get_compile_service),
) -> MarkupUpdateResponse:
    """Store edited markup; resume projects compile after the debounce window."""
    project = await service.update_markup(user_id, project_id, request.markup)
    return MarkupUpdateResponse(project_id=project.id, compile_scheduled=project.kind.compiles)


@router.post("/{project_id}/repair")
async def repair_project(
    project_id: UUID,
    user_id: str = Depends(get_user_id),
    service: CompileService = Depends(get_compile_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Repair the last compile failure on request and recompile."""
    outcome = await service.repair_project(user_id, project_id)
    snapshot = service.controllers.get(project_id).status()
    return outcome_response(outcome, snapshot, settings.compiler.error_excerpt_chars)


@router.get("/{project_id}/compile-status", response_model=CompileStatusResponse)
async def compile_status(
    project_id: UUID,
    user_id: str = Depends(get_user_id),
    service: CompileService = Depends(get_compile_service),
    settings: Settings = Depends(get_settings),
) -> CompileStatusResponse:
    """Report repair loop state, retry count and last diagnostic."""
    snapshot, artifact = await service.get_status(user_id, project_id)
    return CompileStatusResponse(
        project_id=project_id,
        state=snapshot.state,
        retry_count=snapshot.retry_count,
        auto_repairs_used=snapshot.auto_repairs_used,
        max_repair_attempts=snapshot.max_repair_attempts,
        last_diagnostic=clip_diagnostic(
            snapshot.last_diagnostic, settings.compiler.error_excerpt_chars
        ),
        gave_up=snapshot.gave_up,
        pending_compile=snapshot.pending_compile,
        has_artifact=artifact is not None,
    )


@router.get("/{project_id}/artifact")
async def get_artifact(
    project_id: UUID,
    user_id: str = Depends(get_user_id),
    service: CompileService = Depends(get_compile_service),
) -> Response:
    """Serve the last successfully compiled PDF."""
    _, artifact = await service.get_status(user_id, project_id)
    if artifact is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No compiled artifact yet",
        )
    return Response(content=artifact, media_type=PDF_MEDIA_TYPE)
