from datetime import datetime, timedelta, timezone

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.admin.schemas.dashboard import (
    AdminOverviewResponse,
    LeadCounts,
    TrialCounts,
    WeeklyReportData,
)
from leadflow.features.clients.models.client import Client
from leadflow.features.leads.models.lead import Lead
from leadflow.features.leads.services.lead import LeadService
from leadflow.features.subscribers.models.subscriber import Subscriber
from leadflow.features.trials.models.trial_signup import TrialSignup, TrialStatus
from leadflow.platform.db.base import as_utc


class AdminDashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_overview(self, now: datetime | None = None) -> AdminOverviewResponse:
        now = now or datetime.now(timezone.utc)
        # "Today" is the current UTC calendar day
        day_start = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
        day_end = day_start + timedelta(days=1)

        total_subscribers = await self.db.scalar(select(func.count(Subscriber.id)))
        total_trials = await self.db.scalar(select(func.count(TrialSignup.id)))
        active_trials = await self.db.scalar(
            select(func.count(TrialSignup.id)).where(
                or_(
                    TrialSignup.status == TrialStatus.NEW.value,
                    TrialSignup.status == TrialStatus.ACTIVE.value,
                )
            )
        )
        total_clients = await self.db.scalar(select(func.count(Client.id)))
        total_leads = await self.db.scalar(select(func.count(Lead.id)))
        todays_leads = await self.db.scalar(
            select(func.count(Lead.id)).where(Lead.created_at >= day_start, Lead.created_at < day_end)
        )
        revenue = await self.db.scalar(select(func.sum(Lead.job_value)).where(Lead.job_value.isnot(None)))

        return AdminOverviewResponse(
            subscribers=total_subscribers or 0,
            trials=TrialCounts(total=total_trials or 0, active=active_trials or 0),
            clients=total_clients or 0,
            leads=LeadCounts(total=total_leads or 0, today=todays_leads or 0),
            revenue=revenue or 0,
        )

    async def weekly_report(self, client: Client, base_url: str, now: datetime | None = None) -> WeeklyReportData:
        """Figures for the last 7 days: new leads, jobs booked and the value of those jobs."""
        now = now or datetime.now(timezone.utc)
        week_start = now - timedelta(days=7)

        leads = await LeadService(self.db).list_for_client(client.id)
        new_this_week = [lead for lead in leads if week_start < as_utc(lead.created_at) <= now]
        booked_this_week = [
            lead for lead in leads if lead.booked_at is not None and week_start < as_utc(lead.booked_at) <= now
        ]

        return WeeklyReportData(
            businessName=client.business_name,
            contactName=client.contact_name,
            leadsThisWeek=len(new_this_week),
            jobsBooked=len(booked_this_week),
            revenue=sum(lead.job_value or 0 for lead in booked_this_week),
            dashboardUrl=f"{base_url}/dashboard?token={client.dashboard_token}",
        )
