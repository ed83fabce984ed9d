"""
Exception hierarchy for the Draftsmith application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DraftsmithException(Exception):
    """Base exception for all Draftsmith application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DraftsmithException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(DraftsmithException):
    """Raised when settings are inconsistent (e.g. chunk overlap >= chunk size)."""

    pass


class DocumentNotFoundError(DraftsmithException):
    """Raised when a document cannot be found for the requesting user."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)


class ProjectNotFoundError(DraftsmithException):
    """Raised when a project cannot be found for the requesting user."""

    def __init__(self, project_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["project_id"] = project_id
        super().__init__(f"Project not found: {project_id}", details)


class MarkupConflictError(DraftsmithException):
    """Raised when a project's markup changed while an edit of it was being generated."""

    def __init__(self, project_id: str) -> None:
        super().__init__(
            "The project changed while the edit was generated; retry the edit",
            {"project_id": project_id},
        )


class VectorStoreError(DraftsmithException):
    """Raised when the similarity index is unavailable or a query against it fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (build, query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class LLMInvocationError(DraftsmithException):
    """Raised when a language-model call fails terminally."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        rate_limited: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize LLM invocation error.

        Args:
            message: Error message
            provider: Provider that produced the terminal failure
            rate_limited: Whether the terminal failure was itself a rate limit
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        details["rate_limited"] = rate_limited
        self.provider = provider
        self.rate_limited = rate_limited
        super().__init__(message, details)


class GenerationError(DraftsmithException):
    """Raised when the generation agent cannot produce usable output."""

    pass


class ParseError(GenerationError):
    """Raised when structured (JSON) model output cannot be decoded."""

    def __init__(
        self,
        message: str,
        raw_output: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if raw_output is not None:
            details["raw_output_preview"] = raw_output[:200]
        self.raw_output = raw_output
        super().__init__(message, details)


class ProfileExtractionError(DraftsmithException):
    """Raised when profile extraction fails (as opposed to insufficient data)."""

    def __init__(
        self,
        message: str,
        user_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if user_id:
            details["user_id"] = user_id
        super().__init__(message, details)


class CompilationError(DraftsmithException):
    """Raised when the compiler rejects markup; carries its diagnostic verbatim."""

    def __init__(
        self,
        diagnostic: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize compilation error.

        Args:
            diagnostic: Raw compiler diagnostic text
            status_code: HTTP status returned by the compilation service
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.diagnostic = diagnostic
        self.status_code = status_code
        super().__init__(f"Compilation failed: {diagnostic}", details)

    def __str__(self) -> str:
        return self.message


class CompilerUnavailableError(DraftsmithException):
    """Raised when the compilation service cannot be reached after retries."""

    pass


class RepairLimitError(DraftsmithException):
    """Raised when a repair is requested beyond the per-episode ceiling."""

    def __init__(self, project_id: str, attempts: int, limit: int) -> None:
        super().__init__(
            f"Repair limit reached ({attempts}/{limit}); edit the markup manually",
            {"project_id": project_id, "attempts": attempts, "limit": limit},
        )
