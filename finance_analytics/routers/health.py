"""
Health Check Router
Simple health check endpoint
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from finance_analytics.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
