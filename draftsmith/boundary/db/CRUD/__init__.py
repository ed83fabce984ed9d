"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from draftsmith.boundary.db.CRUD import document_crud, profile_crud

    documents = await document_crud.get_recent_by_user(db, user_id, limit=5)
"""

from draftsmith.boundary.db.CRUD.base_crud import BaseCRUD
from draftsmith.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from draftsmith.boundary.db.CRUD.profile_crud import ProfileCRUD, profile_crud
from draftsmith.boundary.db.CRUD.project_crud import ProjectCRUD, project_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "ProfileCRUD",
    "profile_crud",
    "ProjectCRUD",
    "project_crud",
]
