from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.capture_pages.services.capture_page import CapturePageService
from leadflow.platform.db.session import get_db
from leadflow.platform.response import api_response

router = APIRouter(prefix="/capture-pages", tags=["Capture Pages"])


@router.post("/{slug}/view")
async def track_view(slug: str, db: AsyncSession = Depends(get_db)):
    await CapturePageService(db).record_view(slug)
    return api_response()
