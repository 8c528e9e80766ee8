from datetime import datetime, timezone

from fastapi import APIRouter

from leadflow.platform.config import settings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check():
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
