from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Header, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.notifications.services.notifier import EmailNotifier, get_notifier
from leadflow.features.webhooks.services.whop import WhopWebhookService, verify_whop_signature
from leadflow.platform.config import Settings, get_settings
from leadflow.platform.db.session import get_db
from leadflow.platform.logger import get_logger

router = APIRouter(prefix="/whop", tags=["Webhooks"])
logger = get_logger(__name__)


@router.post("")
async def receive_whop_event(
    background_tasks: BackgroundTasks,
    payload: dict[str, Any] = Body(...),
    whop_signature: Optional[str] = Header(None, alias="whop-signature"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    notifier: EmailNotifier = Depends(get_notifier),
):
    action = payload.get("action")
    logger.info(f"Whop webhook: {action}")

    verify_whop_signature(settings.WHOP_WEBHOOK_SECRET, whop_signature)

    try:
        await WhopWebhookService(db, notifier, background_tasks).handle(action, payload.get("data"))
    except Exception:
        logger.exception("Whop webhook error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook processing failed"
        )

    return JSONResponse(content={"received": True})
