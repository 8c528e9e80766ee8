from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.admin.services.dashboard import AdminDashboardService
from leadflow.platform.db.session import get_db

router = APIRouter(tags=["Admin - Dashboard"])


@router.get("/overview", summary="Get global counts")
async def get_overview(db: AsyncSession = Depends(get_db)):
    """
    Global counts:
    - subscribers
    - trials (total, and active = status new or active)
    - clients
    - leads (total, and created today in UTC)
    - revenue summed over leads with a job value
    """
    overview = await AdminDashboardService(db).get_overview()
    return JSONResponse(content=jsonable_encoder(overview))
