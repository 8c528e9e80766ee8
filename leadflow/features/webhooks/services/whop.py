import hmac
from typing import Any

from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.clients.models.client import ClientStatus
from leadflow.features.clients.services.client import ClientService
from leadflow.features.notifications.services.notifier import EmailNotifier
from leadflow.platform.logger import get_logger

logger = get_logger(__name__)


def verify_whop_signature(configured_secret: str | None, presented: str | None) -> None:
    """
    Shared-secret check on the whop-signature header.

    This compares the header to the secret directly rather than verifying an
    HMAC of the body, and is skipped entirely when no secret is configured.
    """
    if not configured_secret:
        return
    if presented is None or not hmac.compare_digest(presented.encode(), configured_secret.encode()):
        logger.warning("Invalid Whop webhook signature")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid signature")


class WhopWebhookService:
    """Applies Whop payment/membership events to clients, matched by email."""

    def __init__(self, db: AsyncSession, notifier: EmailNotifier, background_tasks: BackgroundTasks):
        self.clients = ClientService(db)
        self.notifier = notifier
        self.background_tasks = background_tasks

    async def handle(self, action: str | None, data: dict[str, Any] | None) -> None:
        data = data if isinstance(data, dict) else {}
        handlers = {
            "payment.succeeded": self._payment_succeeded,
            "membership.went_valid": self._membership_valid,
            "membership.went_invalid": self._membership_invalid,
            "payment.failed": self._payment_failed,
        }
        handler = handlers.get(action)
        if handler is None:
            logger.info(f"Unhandled Whop event: {action}")
            return
        await handler(data)

    @staticmethod
    def _user(data: dict) -> dict:
        user = data.get("user")
        return user if isinstance(user, dict) else {}

    async def _activate(self, email: str | None, membership_id, user_id) -> None:
        if not email:
            return
        matched = await self.clients.set_status_by_email(
            email,
            ClientStatus.ACTIVE.value,
            whop_membership_id=membership_id,
            whop_user_id=user_id,
        )
        if not matched:
            logger.info(f"No client with email {email}; nothing to activate")

    async def _payment_succeeded(self, data: dict) -> None:
        user = self._user(data)
        plan = data.get("plan") if isinstance(data.get("plan"), dict) else {}
        email = user.get("email")
        amount = plan.get("initial_price") or plan.get("renewal_price")
        logger.info(f"Payment succeeded: {email}, plan: {plan.get('id')}, amount: ${amount}")

        await self._activate(email, data.get("membership"), user.get("id"))

        self.background_tasks.add_task(
            self.notifier.notify_operator,
            "Payment Received",
            f"${amount} from {email}",
            {
                "customer": user.get("username") or email,
                "email": email,
                "amount": amount,
                "plan": plan.get("plan_type") or "N/A",
                "membership": data.get("membership") or "N/A",
            },
            subject=f"💰 New Payment: ${amount} from {email}",
        )

    async def _membership_valid(self, data: dict) -> None:
        user = self._user(data)
        email = user.get("email")
        logger.info(f"Membership valid: {email}")
        await self._activate(email, data.get("id"), user.get("id"))

    async def _membership_invalid(self, data: dict) -> None:
        email = self._user(data).get("email")
        logger.info(f"Membership invalid: {email}")
        if email:
            await self.clients.set_status_by_email(email, ClientStatus.CHURNED.value)

        self.background_tasks.add_task(
            self.notifier.notify_operator,
            "Membership Cancelled",
            str(email),
            {
                "email": email,
                "membership": data.get("id") or "N/A",
                "note": "Check Whop dashboard for details.",
            },
            subject=f"⚠️ Membership Cancelled: {email}",
        )

    async def _payment_failed(self, data: dict) -> None:
        email = self._user(data).get("email")
        logger.info(f"Payment failed: {email}")
        self.background_tasks.add_task(
            self.notifier.notify_operator,
            "Payment Failed",
            str(email),
            {"email": email, "note": "Whop will retry automatically. Monitor in your Whop dashboard."},
            subject=f"❌ Payment Failed: {email}",
        )
