"""API routers."""

from .chat import router as chat_router
from .documents import router as documents_router
from .health import router as health_router
from .profile import router as profile_router
from .projects import router as projects_router

__all__ = [
    "chat_router",
    "documents_router",
    "health_router",
    "profile_router",
    "projects_router",
]
