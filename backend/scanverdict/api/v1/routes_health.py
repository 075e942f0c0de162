from fastapi import APIRouter

from scanverdict.core.config import settings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict:
    """
    Simple liveness / readiness check.
    """
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "scanner_configured": bool(settings.SCAN_WEBHOOK_URL),
    }
