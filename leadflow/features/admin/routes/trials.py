from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.trials.schemas.trial_signup import TrialSignupUpdate
from leadflow.features.trials.services.trial_signup import TrialSignupService
from leadflow.platform.db.session import get_db
from leadflow.platform.response import api_response

router = APIRouter(prefix="/trials", tags=["Admin - Trials"])


@router.patch("/{trial_id}")
async def update_trial(trial_id: str, payload: TrialSignupUpdate, db: AsyncSession = Depends(get_db)):
    await TrialSignupService(db).update(trial_id, payload.model_dump(exclude_unset=True))
    return api_response(message="Trial updated")
