from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.leads.schemas.lead import LeadCreate, LeadUpdate
from leadflow.features.leads.services.lead import LeadService, queue_lead_notifications
from leadflow.features.notifications.services.notifier import EmailNotifier, get_notifier
from leadflow.platform.db.session import get_db
from leadflow.platform.logger import get_logger
from leadflow.platform.response import api_response

router = APIRouter(prefix="/leads", tags=["Leads"])
logger = get_logger(__name__)


@router.post("")
async def capture_lead(
    payload: LeadCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
):
    try:
        lead, client = await LeadService(db).capture_lead(payload)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Lead capture error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Lead capture failed")

    logger.info(
        "Lead captured",
        extra={"lead_id": lead.id, "client_id": lead.client_id, "capture_page": lead.capture_page},
    )
    queue_lead_notifications(background_tasks, notifier, lead, client)

    return api_response(id=lead.id, message="Lead captured successfully")


@router.patch("/{lead_id}")
async def update_lead(
    lead_id: str,
    payload: LeadUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        await LeadService(db).update_lead(lead_id, payload.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Lead update error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Update failed")

    return api_response(message="Lead updated")
