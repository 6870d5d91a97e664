"""
Diagnostics API.

Read-only HTTP endpoints that resolve an annotation map on request.
Observation only: nothing is stored and no resource is modified.
"""

from typing import Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from pydantic import BaseModel, ConfigDict

from .features import FeatureGates
from .report import AnnotationReport, inspect_annotations
from .view import AnnotationView


router = APIRouter(prefix="/annotations", tags=["annotations"])


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    model_config = ConfigDict(extra="forbid")
    
    status: str = "ok"


class ResolveRequest(BaseModel):
    """
    Annotations to resolve.
    
    http2 overrides the server's HTTP2 gate for this request when set.
    """
    
    model_config = ConfigDict(extra="forbid")
    
    annotations: Dict[str, str]
    http2: Optional[bool] = None


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok")


@router.post("/resolve", response_model=AnnotationReport)
async def resolve_annotations(body: ResolveRequest, request: Request):
    """
    Resolve the posted annotations.
    
    Rejected annotations are reported as events in a 200 response;
    only a malformed request body is an HTTP error.
    """
    features: FeatureGates = request.app.state.feature_gates
    if body.http2 is not None:
        features = FeatureGates(http2=body.http2)
    
    return inspect_annotations(AnnotationView(body.annotations, features))


def create_app(features: Optional[FeatureGates] = None) -> FastAPI:
    """
    Build the diagnostics application.
    
    Args:
        features: Default gate snapshot, loaded from the environment if None
    """
    app = FastAPI(title="Service Annotations", version="0.1.0")
    app.state.feature_gates = features if features is not None else FeatureGates.from_environ()
    app.include_router(router)
    return app
