from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.notifications.services.notifier import EmailNotifier, get_notifier
from leadflow.features.notifications.services.templates import EmailTemplate
from leadflow.features.trials.schemas.trial_signup import TrialSignupIn
from leadflow.features.trials.services.trial_signup import TrialSignupService
from leadflow.platform.db.session import get_db
from leadflow.platform.logger import get_logger
from leadflow.platform.response import api_response

router = APIRouter(tags=["Trials"])
logger = get_logger(__name__)


@router.post("/trial-signup")
async def trial_signup(
    payload: TrialSignupIn,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
):
    try:
        signup = await TrialSignupService(db).create_signup(payload)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Trial signup error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Signup failed")

    logger.info(f"Trial signup {signup.id}: {signup.business_name} ({signup.industry}) - {signup.city}")

    background_tasks.add_task(
        notifier.send_template,
        signup.email,
        EmailTemplate.TRIAL_WELCOME,
        {"firstName": signup.first_name},
    )
    background_tasks.add_task(
        notifier.notify_operator,
        "Trial Signup",
        f"{signup.first_name} {signup.last_name or ''} — {signup.business_name}",
        {
            "firstName": signup.first_name,
            "lastName": signup.last_name,
            "businessName": signup.business_name,
            "email": signup.email,
            "phone": signup.phone,
            "industry": signup.industry,
            "city": signup.city,
            "source": signup.source,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        subject=f"🚀 NEW TRIAL SIGNUP: {signup.business_name} ({signup.industry}) — {signup.city}",
    )

    return api_response(id=signup.id, message="Trial signup successful")
