"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - DocumentModel, DocumentChunkModel, ProfileModel, ProjectModel: Domain entities
  - document_crud, profile_crud, project_crud: CRUD operation singletons

Dependencies: sqlalchemy, draftsmith.configs
System role: Persistence adapter for documents, profiles and projects
"""

from draftsmith.boundary.db.base import Base, TimestampMixin, UUIDMixin
from draftsmith.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    init_models,
)
from draftsmith.boundary.db.models import (
    DocumentChunkModel,
    DocumentModel,
    ProfileModel,
    ProjectModel,
)
from draftsmith.boundary.db.CRUD import (
    BaseCRUD,
    DocumentCRUD,
    ProfileCRUD,
    ProjectCRUD,
    document_crud,
    profile_crud,
    project_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "init_models",
    # Models
    "DocumentModel",
    "DocumentChunkModel",
    "ProfileModel",
    "ProjectModel",
    # CRUD classes
    "BaseCRUD",
    "DocumentCRUD",
    "ProfileCRUD",
    "ProjectCRUD",
    # CRUD singletons
    "document_crud",
    "profile_crud",
    "project_crud",
]
