"""
Database models package.

Exports:
  - DocumentModel, DocumentChunkModel: Uploaded documents and their chunks
  - ProfileModel: One structured profile per user
  - ProjectModel: Generated markup projects

Dependencies: sqlalchemy, draftsmith.boundary.db.base
System role: Database model definitions for domain entities
"""

from draftsmith.boundary.db.models.document_model import DocumentChunkModel, DocumentModel
from draftsmith.boundary.db.models.profile_model import ProfileModel
from draftsmith.boundary.db.models.project_model import ProjectModel

__all__ = [
    "DocumentModel",
    "DocumentChunkModel",
    "ProfileModel",
    "ProjectModel",
]
