from datetime import datetime, timedelta, timezone
from typing import Iterable

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.clients.models.client import Client
from leadflow.features.clients.services.client import ClientService
from leadflow.features.leads.models.lead import Lead, LeadStatus
from leadflow.features.leads.services.lead import LeadService
from leadflow.platform.db.base import as_utc

RECENT_LEADS = 20
WEEKS = 4


def lead_stats(leads: list[Lead], plan_price: float | None) -> dict:
    total = len(leads)
    booked = sum(1 for lead in leads if lead.status == LeadStatus.BOOKED.value)

    close_rate = f"{booked / total * 100:.1f}" if total else 0
    cost_per_lead = f"{(plan_price or 0) / total:.0f}" if total else 0

    return {
        "totalLeads": total,
        "newLeads": sum(1 for lead in leads if lead.status == LeadStatus.NEW.value),
        "contactedLeads": sum(1 for lead in leads if lead.status == LeadStatus.CONTACTED.value),
        "bookedLeads": booked,
        "totalRevenue": sum(lead.job_value or 0 for lead in leads),
        "closeRate": close_rate,
        "costPerLead": cost_per_lead,
    }


def weekly_histogram(leads: Iterable[Lead], now: datetime) -> list[dict]:
    """
    Four consecutive 7-day windows ending at now, oldest first (W1..W4).
    A window covers (end - 7 days, end].
    """
    now = as_utc(now)
    created = [as_utc(lead.created_at) for lead in leads]
    buckets = []
    for i in range(WEEKS - 1, -1, -1):
        end = now - timedelta(days=7 * i)
        start = end - timedelta(days=7)
        count = sum(1 for ts in created if start < ts <= end)
        buckets.append({"week": f"W{WEEKS - i}", "count": count})
    return buckets


def recent_lead(lead: Lead) -> dict:
    return {
        "id": lead.id,
        "name": lead.name,
        "phone": lead.phone,
        "serviceNeeded": lead.service_needed,
        "city": lead.city,
        "status": lead.status,
        "jobValue": lead.job_value,
        "createdAt": lead.created_at,
    }


def build_dashboard(client: Client, leads: list[Lead], now: datetime) -> dict:
    """leads must be ordered newest first."""
    return {
        "client": {
            "businessName": client.business_name,
            "plan": client.plan,
            "industry": client.industry,
            "city": client.city,
        },
        "stats": lead_stats(leads, client.plan_price),
        "weeklyLeads": weekly_histogram(leads, now),
        "recentLeads": [recent_lead(lead) for lead in leads[:RECENT_LEADS]],
    }


class ClientDashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_dashboard(self, token: str, now: datetime | None = None) -> dict:
        client = await ClientService(self.db).get_by_token(token)
        if client is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dashboard not found")

        leads = await LeadService(self.db).list_for_client(client.id)
        return build_dashboard(client, leads, now or datetime.now(timezone.utc))
