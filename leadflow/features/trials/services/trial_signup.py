from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.subscribers.services.subscriber import SubscriberService, normalize_email
from leadflow.features.trials.models.trial_signup import TrialSignup, TrialStatus
from leadflow.features.trials.schemas.trial_signup import TrialSignupIn
from leadflow.platform.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_TRIAL = "Email already registered for a trial"


class TrialSignupService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_signup(self, payload: TrialSignupIn) -> TrialSignup:
        if not payload.first_name or not payload.email or not payload.phone:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="First name, email, and phone required",
            )

        email = normalize_email(payload.email)
        existing = await self.db.execute(select(TrialSignup.id).where(TrialSignup.email == email))
        if existing.first():
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_TRIAL)

        signup = TrialSignup(
            first_name=payload.first_name,
            last_name=payload.last_name,
            business_name=payload.business_name,
            email=email,
            phone=payload.phone,
            industry=payload.industry,
            city=payload.city,
            source=payload.source or "free_trial_page",
            status=TrialStatus.NEW.value,
        )
        self.db.add(signup)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_TRIAL)
        await self.db.refresh(signup)

        # Every trial signer also becomes a subscriber
        await SubscriberService(self.db).subscribe(email, "trial_signup")
        return signup

    async def get(self, trial_id: str) -> TrialSignup | None:
        result = await self.db.execute(select(TrialSignup).where(TrialSignup.id == trial_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[TrialSignup]:
        result = await self.db.execute(select(TrialSignup).order_by(TrialSignup.created_at.desc()))
        return list(result.scalars().all())

    async def update(self, trial_id: str, fields: dict) -> TrialSignup:
        signup = await self.get(trial_id)
        if signup is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trial signup not found")

        for name, value in fields.items():
            if name == "status" and not value:
                continue
            setattr(signup, name, value)
        await self.db.commit()
        await self.db.refresh(signup)
        logger.info(f"Trial {trial_id} updated: {sorted(fields)}")
        return signup
