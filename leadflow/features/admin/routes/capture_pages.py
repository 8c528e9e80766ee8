from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.capture_pages.schemas.capture_page import CapturePageCreate
from leadflow.features.capture_pages.services.capture_page import CapturePageService
from leadflow.platform.config import Settings, get_settings
from leadflow.platform.db.session import get_db
from leadflow.platform.logger import get_logger
from leadflow.platform.response import api_response

router = APIRouter(prefix="/capture-pages", tags=["Admin - Capture Pages"])
logger = get_logger(__name__)


@router.post("")
async def create_capture_page(
    payload: CapturePageCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        page = await CapturePageService(db).create_page(payload)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Capture page creation error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Creation failed")

    return api_response(id=page.id, url=f"{settings.BASE_URL}/quote/{page.slug}")
