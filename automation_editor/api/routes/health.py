"""
Health Check API Routes
System health and status endpoints
"""
from fastapi import APIRouter
from automation_editor.core.config import get_settings

router = APIRouter(tags=["Health"])

settings = get_settings()


@router.get("/health")
async def health_check():
    """
    Detailed health check endpoint

    Returns system status and component health
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "components": {
            "catalog": "ok",
            "editor_service": "ok"
        },
        "automation_api": settings.AUTOMATION_API_BASE_URL
    }


@router.get("/ping")
async def ping():
    """
    Simple ping endpoint for load balancers
    """
    return {"status": "ok"}
