from datetime import datetime, timezone

from fastapi import BackgroundTasks, HTTPException, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.capture_pages.models.capture_page import CapturePage
from leadflow.features.clients.models.client import Client
from leadflow.features.leads.models.lead import Lead, LeadActivity, LeadStatus
from leadflow.features.leads.schemas.lead import LeadCreate
from leadflow.features.notifications.services.notifier import EmailNotifier
from leadflow.features.notifications.services.templates import EmailTemplate
from leadflow.platform.db.base import utcnow
from leadflow.platform.logger import get_logger

logger = get_logger(__name__)


class LeadService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _resolve_capture_page(self, slug: str | None) -> CapturePage | None:
        if not slug:
            return None
        result = await self.db.execute(select(CapturePage).where(CapturePage.slug == slug))
        return result.scalar_one_or_none()

    async def capture_lead(self, payload: LeadCreate, created_by: str | None = None) -> tuple[Lead, Client | None]:
        """
        Store a landing-page submission.

        The owning client is resolved through the capture-page slug; an unknown
        or absent slug leaves the lead unassigned. The lead row, the page's
        submission counter and the "created" activity row commit together.
        """
        if not payload.name or not payload.phone:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name and phone required")

        page = await self._resolve_capture_page(payload.capture_page)
        client_id = page.client_id if page else None

        lead = Lead(
            client_id=client_id,
            capture_page=payload.capture_page,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            service_needed=payload.service_needed,
            address=payload.address,
            city=payload.city,
            postal_code=payload.postal_code,
            message=payload.message,
            source=payload.source or "facebook",
            utm_source=payload.utm_source,
            utm_medium=payload.utm_medium,
            utm_campaign=payload.utm_campaign,
            status=LeadStatus.NEW.value,
        )
        self.db.add(lead)
        await self.db.flush()

        if page is not None:
            await self.db.execute(
                update(CapturePage)
                .where(CapturePage.id == page.id)
                .values(submissions=CapturePage.submissions + 1)
            )

        self.db.add(
            LeadActivity(
                lead_id=lead.id,
                action="created",
                details={"source": payload.source, "capture_page": payload.capture_page},
                created_by=created_by,
            )
        )
        await self.db.commit()
        await self.db.refresh(lead)

        client = await self.db.get(Client, client_id) if client_id else None
        return lead, client

    async def get_lead(self, lead_id: str) -> Lead | None:
        result = await self.db.execute(select(Lead).where(Lead.id == lead_id))
        return result.scalar_one_or_none()

    async def update_lead(self, lead_id: str, fields: dict, created_by: str | None = None) -> Lead:
        lead = await self.get_lead(lead_id)
        if lead is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead not found")

        # status is NOT NULL; a null or blank status is treated as "not supplied"
        if not fields.get("status"):
            fields.pop("status", None)

        for name, value in fields.items():
            setattr(lead, name, value)
        lead.updated_at = utcnow()

        self.db.add(
            LeadActivity(
                lead_id=lead.id,
                action="status_updated",
                details=jsonable_encoder(fields),
                created_by=created_by,
            )
        )
        await self.db.commit()
        await self.db.refresh(lead)
        return lead

    async def list_leads(
        self,
        client_id: str | None = None,
        status_filter: str | None = None,
        limit: int | None = None,
    ) -> list[Lead]:
        query = select(Lead)
        if client_id:
            query = query.where(Lead.client_id == client_id)
        if status_filter:
            query = query.where(Lead.status == status_filter)
        query = query.order_by(Lead.created_at.desc())
        if limit:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_for_client(self, client_id: str) -> list[Lead]:
        return await self.list_leads(client_id=client_id)

    async def get_activity(self, lead_id: str) -> list[LeadActivity]:
        if await self.get_lead(lead_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead not found")
        result = await self.db.execute(
            select(LeadActivity).where(LeadActivity.lead_id == lead_id).order_by(LeadActivity.created_at)
        )
        return list(result.scalars().all())


def queue_lead_notifications(
    background_tasks: BackgroundTasks,
    notifier: EmailNotifier,
    lead: Lead,
    client: Client | None,
) -> None:
    """Email the owning client (if any) and always the operator, after the response is sent."""
    service_needed = lead.service_needed or "Service request"

    if client is not None:
        background_tasks.add_task(
            notifier.send_template,
            client.email,
            EmailTemplate.NEW_LEAD_NOTIFICATION,
            {
                "leadName": lead.name,
                "phone": lead.phone,
                "serviceNeeded": service_needed,
                "city": lead.city or "Local area",
                "message": lead.message,
            },
        )

    background_tasks.add_task(
        notifier.notify_operator,
        "New Lead",
        f"{lead.name} — {lead.phone}",
        {
            "id": lead.id,
            "name": lead.name,
            "email": lead.email,
            "phone": lead.phone,
            "service_needed": lead.service_needed,
            "city": lead.city,
            "capture_page": lead.capture_page,
            "source": lead.source,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        subject=f"⚡ NEW LEAD: {lead.name} — {service_needed} ({lead.capture_page or 'direct'})",
    )
