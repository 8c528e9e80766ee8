from typing import Any, Mapping

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from leadflow.features.notifications.models.email_log import EmailLog, EmailStatus
from leadflow.features.notifications.services.templates import EmailTemplate, render_template
from leadflow.platform.config import Settings, get_settings
from leadflow.platform.db.session import SessionLocal
from leadflow.platform.logger import get_logger
from leadflow.platform.services.email import send_email

logger = get_logger(__name__)


class EmailNotifier:
    """
    Best-effort outbound email.

    send() never raises: every attempt is written to email_log as "sent" or "failed"
    and the boolean result tells the caller which. Route handlers schedule these
    coroutines as background tasks so the HTTP response never waits on SMTP.
    """

    def __init__(self, settings: Settings, session_factory=SessionLocal):
        self.settings = settings
        self.session_factory = session_factory

    async def send(
        self,
        recipient: str,
        subject: str,
        html: str,
        text: str | None = None,
        template: str = "custom",
    ) -> bool:
        try:
            await run_in_threadpool(send_email, self.settings, recipient, subject, html, text)
            status = EmailStatus.SENT
            logger.info(f"Email '{template}' sent to {recipient}")
        except Exception as e:
            status = EmailStatus.FAILED
            logger.error(f"Email send failed ({template} -> {recipient}): {e}")

        await self._record(recipient, subject, template, status)
        return status is EmailStatus.SENT

    async def send_template(
        self,
        recipient: str,
        template: EmailTemplate | str,
        data: Mapping[str, Any],
        subject: str | None = None,
    ) -> bool:
        try:
            rendered = render_template(template, data)
        except Exception as e:
            logger.error(f"Email template '{template}' failed to render for {recipient}: {e}")
            return False
        return await self.send(
            recipient,
            subject or rendered.subject,
            rendered.html,
            template=EmailTemplate(template).value,
        )

    async def notify_operator(
        self,
        type_: str,
        summary: str,
        details: Mapping[str, Any],
        subject: str | None = None,
    ) -> bool:
        """Internal notification to the operator inbox (NOTIFICATION_EMAIL)."""
        return await self.send_template(
            self.settings.NOTIFICATION_EMAIL,
            EmailTemplate.INTERNAL_NOTIFICATION,
            {"type": type_, "summary": summary, "details": dict(details)},
            subject=subject,
        )

    async def _record(self, recipient: str, subject: str, template: str, status: EmailStatus) -> None:
        try:
            async with self.session_factory() as db:
                db.add(EmailLog(recipient=recipient, subject=subject, template=template, status=status.value))
                await db.commit()
        except SQLAlchemyError:
            logger.exception(f"Could not record email log entry for {recipient}")


def get_notifier(settings: Settings = Depends(get_settings)) -> EmailNotifier:
    return EmailNotifier(settings)
