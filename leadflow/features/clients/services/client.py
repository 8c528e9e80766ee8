from fastapi import HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.clients.models.client import Client, generate_dashboard_token
from leadflow.features.clients.schemas.client import ClientCreate
from leadflow.features.subscribers.services.subscriber import normalize_email
from leadflow.features.trials.models.trial_signup import TrialSignup, TrialStatus
from leadflow.platform.db.base import utcnow
from leadflow.platform.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_CLIENT = "A client with this email already exists"

# Columns an operator edit may change but never blank out
_REQUIRED_COLUMNS = {"business_name", "contact_name", "phone", "industry", "city", "plan", "plan_price", "status"}


class ClientService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_client(self, payload: ClientCreate) -> Client:
        """
        Create a client with a fresh dashboard token. When trial_id is given the
        trial is marked converted in the same transaction.
        """
        trial = None
        if payload.trial_id:
            trial = await self.db.get(TrialSignup, payload.trial_id)
            if trial is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trial signup not found")

        email = normalize_email(payload.email)
        existing = await self.db.execute(select(Client.id).where(Client.email == email))
        if existing.first():
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_CLIENT)

        client = Client(
            trial_id=payload.trial_id,
            business_name=payload.business_name,
            contact_name=payload.contact_name,
            email=email,
            phone=payload.phone,
            industry=payload.industry,
            city=payload.city,
            service_area=payload.service_area,
            services_offered=payload.services_offered,
            avg_job_value=payload.avg_job_value,
            plan=payload.plan or "starter",
            plan_price=payload.plan_price if payload.plan_price is not None else 397,
            dashboard_token=generate_dashboard_token(),
            onboarded_at=utcnow(),
        )
        self.db.add(client)
        if trial is not None:
            trial.status = TrialStatus.CONVERTED.value

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_CLIENT)
        await self.db.refresh(client)

        logger.info(f"Client {client.id} created ({client.business_name}, trial={payload.trial_id})")
        return client

    async def get(self, client_id: str) -> Client | None:
        return await self.db.get(Client, client_id)

    async def get_by_token(self, token: str) -> Client | None:
        result = await self.db.execute(select(Client).where(Client.dashboard_token == token))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Client]:
        result = await self.db.execute(select(Client).order_by(Client.created_at.desc()))
        return list(result.scalars().all())

    async def update(self, client_id: str, fields: dict) -> Client:
        client = await self.get(client_id)
        if client is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")

        for name, value in fields.items():
            if value is None and name in _REQUIRED_COLUMNS:
                continue
            setattr(client, name, value)
        await self.db.commit()
        await self.db.refresh(client)
        return client

    async def set_status_by_email(self, email: str, new_status: str, **linkage) -> bool:
        """
        Billing-driven status change. linkage may carry whop_membership_id / whop_user_id.
        Returns False (and changes nothing) when no client has that email.
        """
        stmt = (
            update(Client)
            .where(Client.email == normalize_email(email))
            .values(status=new_status, updated_at=utcnow(), **linkage)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount > 0
