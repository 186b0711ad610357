"""Health routes - Liveness and artifact storage checks."""

from fastapi import APIRouter, Depends

from defai.api.deps import get_artifact_store
from defai.core.artifacts import ArtifactStore
from defai.schemas.api import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health(store: ArtifactStore = Depends(get_artifact_store)):
    """Health check endpoint for load balancer and Docker health checks."""
    return HealthResponse(
        status="healthy",
        artifact_dir=str(store.artifact_dir),
        artifacts=len(store.list_paths()),
    )
