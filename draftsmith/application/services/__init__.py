"""Service orchestrators."""

from .compile_service import CompileService, RepairControllers
from .document_service import DocumentService
from .generation_service import Attachment, GenerationService
from .profile_service import ProfileService, UserLocks

__all__ = [
    "Attachment",
    "CompileService",
    "DocumentService",
    "GenerationService",
    "ProfileService",
    "RepairControllers",
    "UserLocks",
]
