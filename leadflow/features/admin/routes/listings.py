from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.clients.schemas.client import ClientOut
from leadflow.features.clients.services.client import ClientService
from leadflow.features.leads.schemas.lead import LeadActivityOut, LeadOut
from leadflow.features.leads.services.lead import LeadService
from leadflow.features.subscribers.schemas.subscriber import SubscriberOut
from leadflow.features.subscribers.services.subscriber import SubscriberService
from leadflow.features.trials.schemas.trial_signup import TrialSignupOut
from leadflow.features.trials.services.trial_signup import TrialSignupService
from leadflow.platform.db.session import get_db
from leadflow.platform.response import api_response

router = APIRouter(tags=["Admin - Listings"])


@router.get("/trials")
async def list_trials(db: AsyncSession = Depends(get_db)):
    trials = await TrialSignupService(db).list_all()
    return api_response(trials=[TrialSignupOut.model_validate(t) for t in trials], total=len(trials))


@router.get("/subscribers")
async def list_subscribers(db: AsyncSession = Depends(get_db)):
    subscribers = await SubscriberService(db).list_all()
    return api_response(
        subscribers=[SubscriberOut.model_validate(s) for s in subscribers],
        total=len(subscribers),
    )


@router.get("/leads")
async def list_leads(
    client_id: Optional[str] = Query(None, description="Only leads owned by this client"),
    status: Optional[str] = Query(None, description="Only leads with this status"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of leads returned"),
    db: AsyncSession = Depends(get_db),
):
    leads = await LeadService(db).list_leads(client_id=client_id, status_filter=status, limit=limit)
    return api_response(leads=[LeadOut.model_validate(lead) for lead in leads], total=len(leads))


@router.get("/leads/{lead_id}/activity")
async def list_lead_activity(lead_id: str, db: AsyncSession = Depends(get_db)):
    activity = await LeadService(db).get_activity(lead_id)
    return api_response(
        activity=[LeadActivityOut.model_validate(a) for a in activity],
        total=len(activity),
    )


@router.get("/clients")
async def list_clients(db: AsyncSession = Depends(get_db)):
    clients = await ClientService(db).list_all()
    return api_response(clients=[ClientOut.model_validate(c) for c in clients], total=len(clients))
