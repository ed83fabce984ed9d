"""
Health check API endpoints.

Routes: GET /health

Dependencies: draftsmith.models
System role: Health check HTTP API
"""

from fastapi import APIRouter

from draftsmith.models.common import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")
