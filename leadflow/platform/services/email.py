import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

import requests

from leadflow.platform.config import Settings
from leadflow.platform.logger import get_logger

logger = get_logger("email_service")


class EmailTransportError(Exception):
    """Raised when neither the relay nor SMTP accepted the message."""


def send_email(settings: Settings, to_email: str, subject: str, html: str, text: str | None = None):
    """
    Send email via HTTP relay service
    Falls back to direct SMTP if relay is not configured or fails.
    """
    if settings.EMAIL_RELAY_URL and settings.EMAIL_RELAY_API_KEY:
        try:
            send_email_via_relay(settings, to_email, subject, html, text)
            return
        except EmailTransportError as e:
            logger.error(f"Email relay failed: {e}")
            logger.info("Attempting direct SMTP as fallback...")
    send_email_direct_smtp(settings, to_email, subject, html, text)


def send_email_via_relay(settings: Settings, to_email: str, subject: str, html: str, text: str | None = None):
    """Send email via HTTP relay service"""
    payload = {
        "to_email": to_email,
        "subject": subject,
        "body": html,
        "text": text or subject,
        "from_address": settings.MAIL_FROM_ADDRESS,
    }
    headers = {
        "X-API-Key": settings.EMAIL_RELAY_API_KEY,
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(
            settings.EMAIL_RELAY_URL,
            json=payload,
            headers=headers,
            timeout=settings.MAIL_TIMEOUT,
        )
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise EmailTransportError(f"Email relay timeout for {to_email}") from e
    except requests.exceptions.RequestException as e:
        if e.response is not None:
            logger.error(f"Relay response {e.response.status_code}: {e.response.text}")
        raise EmailTransportError(f"Email relay service error: {e}") from e

    logger.info(f"Email sent via relay to {to_email}")


def build_message(settings: Settings, to_email: str, subject: str, html: str, text: str | None = None) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = formataddr((settings.MAIL_FROM_NAME, settings.MAIL_FROM_ADDRESS))
    msg["To"] = to_email

    msg.attach(MIMEText(text or subject, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))
    return msg


def send_email_direct_smtp(settings: Settings, to_email: str, subject: str, html: str, text: str | None = None):
    """Base function to send email via SMTP"""
    msg = build_message(settings, to_email, subject, html, text)
    port = settings.MAIL_PORT
    timeout = settings.MAIL_TIMEOUT

    try:
        if port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(settings.MAIL_HOST, port, context=context, timeout=timeout) as server:
                if settings.MAIL_USERNAME:
                    server.login(settings.MAIL_USERNAME, settings.MAIL_PASSWORD)
                server.sendmail(settings.MAIL_FROM_ADDRESS, to_email, msg.as_string())
        else:
            with smtplib.SMTP(settings.MAIL_HOST, port, timeout=timeout) as server:
                server.ehlo()

                if str(settings.MAIL_ENCRYPTION).upper() in ["TLS", "TRUE"]:
                    server.starttls()
                    server.ehlo()

                if settings.MAIL_USERNAME:
                    server.login(settings.MAIL_USERNAME, settings.MAIL_PASSWORD)
                server.sendmail(settings.MAIL_FROM_ADDRESS, to_email, msg.as_string())
    except (smtplib.SMTPException, OSError) as e:
        raise EmailTransportError(f"SMTP delivery to {to_email} failed: {e}") from e
