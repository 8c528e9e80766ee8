from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.clients.services.dashboard import ClientDashboardService
from leadflow.platform.db.session import get_db
from leadflow.platform.logger import get_logger

router = APIRouter(prefix="/dashboard", tags=["Client Dashboard"])
logger = get_logger(__name__)


@router.get("/{token}")
async def get_client_dashboard(token: str, db: AsyncSession = Depends(get_db)):
    """
    Lead dashboard for one client, addressed by its dashboard token:
    - headline counts, revenue, close rate and cost per lead
    - lead counts for the last four weeks
    - the 20 most recent leads
    """
    try:
        dashboard = await ClientDashboardService(db).get_dashboard(token)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Dashboard error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Dashboard load failed")

    # Dashboard payload has no "success" key; the page reads it as-is
    return JSONResponse(content=jsonable_encoder(dashboard))
