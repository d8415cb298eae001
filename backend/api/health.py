"""
api/health.py
=============
GET /api/health — liveness and readiness probe for the DermaDict backend.
"""

from fastapi import APIRouter

from analysis_engine.gateway_client import get_model, is_configured
from backend.schemas.response import HealthResponse

API_VERSION = "1.0.0"

router = APIRouter()


@router.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return service status without contacting the gateway."""
    return HealthResponse(
        status             = "ok",
        gateway_configured = is_configured(),
        model              = get_model(),
        api_version        = API_VERSION,
    )
