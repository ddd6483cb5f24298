"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_settings
from backend.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    """
    Simple liveness endpoint for the LiftLog API.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok", "environment": settings.environment}
