"""
Exception to HTTP response mapping.

Registers one handler for the DraftsmithException hierarchy so routers
raise domain errors and never build error responses themselves.

Dependencies: fastapi, draftsmith.core.exceptions, draftsmith.models
System role: Uniform API error responses
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from draftsmith.configs import get_settings
from draftsmith.core.exceptions import (
    CompilationError,
    CompilerUnavailableError,
    ConfigurationError,
    DocumentNotFoundError,
    DraftsmithException,
    GenerationError,
    LLMInvocationError,
    MarkupConflictError,
    ProfileExtractionError,
    ProjectNotFoundError,
    RepairLimitError,
    ValidationError,
    VectorStoreError,
)
from draftsmith.models.common import ErrorResponse

logger = logging.getLogger(__name__)

QUOTA_MESSAGE = "AI quota exceeded. Please try again in a minute."

# First match wins; subclasses before their bases
STATUS_BY_EXCEPTION: tuple[tuple[type[DraftsmithException], int], ...] = (
    (DocumentNotFoundError, status.HTTP_404_NOT_FOUND),
    (ProjectNotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (RepairLimitError, status.HTTP_409_CONFLICT),
    (MarkupConflictError, status.HTTP_409_CONFLICT),
    (CompilationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (CompilerUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (VectorStoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (LLMInvocationError, status.HTTP_502_BAD_GATEWAY),
    (GenerationError, status.HTTP_502_BAD_GATEWAY),
    (ProfileExtractionError, status.HTTP_502_BAD_GATEWAY),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: DraftsmithException) -> int:
    if isinstance(exc, LLMInvocationError) and exc.rate_limited:
        return status.HTTP_429_TOO_MANY_REQUESTS
    for exc_type, code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(exc: DraftsmithException, code: int) -> ErrorResponse:
    if code == status.HTTP_429_TOO_MANY_REQUESTS:
        return ErrorResponse(error=QUOTA_MESSAGE)
    if isinstance(exc, CompilationError):
        excerpt_chars = get_settings().compiler.error_excerpt_chars
        return ErrorResponse(
            error="Compilation failed",
            details={"diagnostic": exc.diagnostic[:excerpt_chars]},
        )
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR and not isinstance(
        exc, (CompilerUnavailableError, VectorStoreError)
    ):
        # Provider internals stay in the logs
        return ErrorResponse(error=exc.message)
    return ErrorResponse(error=exc.message, details=exc.details or None)


async def draftsmith_exception_handler(request: Request, exc: DraftsmithException) -> JSONResponse:
    code = status_for(exc)
    log = logger.error if code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
    log(
        f"{__name__}:draftsmith_exception_handler - {type(exc).__name__}",
        extra={
            "path": request.url.path,
            "status_code": code,
            "error_msg": exc.message[:500],
        },
    )
    body = error_body(exc, code)
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DraftsmithException, draftsmith_exception_handler)
