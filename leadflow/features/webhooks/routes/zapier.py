from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.leads.schemas.lead import LeadCreate
from leadflow.features.leads.services.lead import LeadService, queue_lead_notifications
from leadflow.features.notifications.services.notifier import EmailNotifier, get_notifier
from leadflow.platform.db.session import get_db
from leadflow.platform.logger import get_logger
from leadflow.platform.response import api_response

router = APIRouter(prefix="/zapier", tags=["Webhooks"])
logger = get_logger(__name__)


@router.post("")
async def receive_zap(
    background_tasks: BackgroundTasks,
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
):
    """Generic automation hook. A "new_lead" event runs the lead-capture path in-process."""
    logger.info(f"Zapier webhook received: {payload}")

    if payload.get("event") == "new_lead":
        try:
            lead_in = LeadCreate.model_validate(payload.get("lead") or {})
            lead, client = await LeadService(db).capture_lead(lead_in, created_by="zapier")
        except (ValidationError, HTTPException) as e:
            # Forwarded leads that fail validation are acknowledged, not bounced back
            logger.warning(f"Zapier lead rejected: {e}")
        except Exception:
            logger.exception("Zapier webhook error")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook failed")
        else:
            queue_lead_notifications(background_tasks, notifier, lead, client)

    return api_response(received=True)
