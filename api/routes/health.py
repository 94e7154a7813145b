"""Health check routes"""

from fastapi import APIRouter
import logging

from api.responses import HealthResponse
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("lodging.api.health")


@router.get("/health-check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name}
