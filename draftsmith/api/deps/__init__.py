"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_compile_service,
    get_document_service,
    get_generation_service,
    get_profile_service,
    get_service_cache,
    get_user_id,
)

__all__ = [
    "ServiceCache",
    "get_compile_service",
    "get_document_service",
    "get_generation_service",
    "get_profile_service",
    "get_service_cache",
    "get_user_id",
]
