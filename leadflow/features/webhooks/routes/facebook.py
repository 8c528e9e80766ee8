from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from leadflow.platform.config import Settings, get_settings
from leadflow.platform.logger import get_logger
from leadflow.platform.response import api_response

router = APIRouter(prefix="/facebook", tags=["Webhooks"])
logger = get_logger(__name__)


@router.get("")
async def verify_subscription(
    mode: Optional[str] = Query(None, alias="hub.mode"),
    token: Optional[str] = Query(None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(None, alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
):
    """Lead-Ads subscription handshake: echo the challenge when the verify token matches."""
    if mode == "subscribe" and settings.WEBHOOK_SECRET and token == settings.WEBHOOK_SECRET:
        return PlainTextResponse(challenge or "", status_code=status.HTTP_200_OK)
    return PlainTextResponse("Forbidden", status_code=status.HTTP_403_FORBIDDEN)


@router.post("")
async def receive_leadgen(payload: dict[str, Any] = Body(...)):
    entries = payload.get("entry")
    if not entries or not isinstance(entries, list):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid webhook data")

    try:
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            changes = entry.get("changes")
            for change in changes if isinstance(changes, list) else []:
                if isinstance(change, dict) and change.get("field") == "leadgen":
                    # TODO: fetch the full lead from the Graph API by leadgen_id and store it via LeadService
                    logger.info(f"Facebook lead webhook: {change.get('value')}")
    except Exception:
        logger.exception("Facebook webhook error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook processing failed"
        )

    return api_response()
