from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.notifications.services.notifier import EmailNotifier, get_notifier
from leadflow.features.subscribers.schemas.subscriber import SubscribeIn
from leadflow.features.subscribers.services.subscriber import SubscriberService
from leadflow.platform.db.session import get_db
from leadflow.platform.logger import get_logger
from leadflow.platform.response import api_response

router = APIRouter(tags=["Subscribers"])
logger = get_logger(__name__)


@router.post("/subscribe")
async def subscribe(
    payload: SubscribeIn,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
):
    if not payload.email or not payload.email.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email required")

    try:
        created = await SubscriberService(db).subscribe(payload.email, payload.source)
    except Exception:
        logger.exception("Subscribe error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Subscription failed")

    logger.info(f"Subscribe {payload.email} (new={created})")
    background_tasks.add_task(
        notifier.notify_operator,
        "New Subscriber",
        payload.email,
        {
            "email": payload.email,
            "source": payload.source,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        subject=f"[LeadFlow24] New subscriber: {payload.email}",
    )

    return api_response(message="Subscribed successfully")
