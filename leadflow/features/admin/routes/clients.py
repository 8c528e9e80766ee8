from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.admin.services.dashboard import AdminDashboardService
from leadflow.features.clients.schemas.client import ClientCreate, ClientUpdate
from leadflow.features.clients.services.client import ClientService
from leadflow.features.notifications.services.notifier import EmailNotifier, get_notifier
from leadflow.features.notifications.services.templates import EmailTemplate
from leadflow.platform.config import Settings, get_settings
from leadflow.platform.db.session import get_db
from leadflow.platform.logger import get_logger
from leadflow.platform.response import api_response

router = APIRouter(prefix="/clients", tags=["Admin - Clients"])
logger = get_logger(__name__)


@router.post("")
async def create_client(
    payload: ClientCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        client = await ClientService(db).create_client(payload)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Client creation error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Client creation failed")

    return api_response(
        client={"id": client.id, "dashboardToken": client.dashboard_token},
        dashboardUrl=f"{settings.BASE_URL}/dashboard?token={client.dashboard_token}",
    )


@router.patch("/{client_id}")
async def update_client(client_id: str, payload: ClientUpdate, db: AsyncSession = Depends(get_db)):
    await ClientService(db).update(client_id, payload.model_dump(exclude_unset=True))
    return api_response(message="Client updated")


@router.post("/{client_id}/weekly-report")
async def send_weekly_report(
    client_id: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    notifier: EmailNotifier = Depends(get_notifier),
):
    """Email the client its last-7-days summary. Awaited so the caller learns whether it went out."""
    client = await ClientService(db).get(client_id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")

    report = await AdminDashboardService(db).weekly_report(client, settings.BASE_URL)
    sent = await notifier.send_template(client.email, EmailTemplate.WEEKLY_REPORT, report.model_dump())
    return api_response(sent=sent, report=report)
