from unittest.mock import MagicMock, patch

import pytest
import requests
from jinja2 import TemplateError
from sqlalchemy import select

from leadflow.features.notifications.models.email_log import EmailLog
from leadflow.features.notifications.services import notifier as notifier_module
from leadflow.features.notifications.services.notifier import EmailNotifier
from leadflow.platform.services import email as email_service
from leadflow.platform.services.email import EmailTransportError, send_email


@pytest.mark.asyncio
async def test_successful_send_is_logged(db, test_settings):
    with patch.object(notifier_module, "send_email") as mock_send:
        sent = await EmailNotifier(test_settings).send_template(
            "dana@reyesroofing.ca", "trial_welcome", {"firstName": "Dana"}
        )

    assert sent is True
    mock_send.assert_called_once()
    entry = (await db.execute(select(EmailLog))).scalar_one()
    assert entry.recipient == "dana@reyesroofing.ca"
    assert entry.template == "trial_welcome"
    assert entry.status == "sent"


@pytest.mark.asyncio
async def test_failed_send_is_logged_not_raised(db, test_settings):
    with patch.object(notifier_module, "send_email", side_effect=EmailTransportError("smtp down")):
        sent = await EmailNotifier(test_settings).notify_operator("New Lead", "Jordan", {"phone": "555"})

    assert sent is False
    entry = (await db.execute(select(EmailLog))).scalar_one()
    assert entry.recipient == "ops@leadflow24.test"
    assert entry.template == "internal_notification"
    assert entry.status == "failed"


def test_relay_failure_falls_back_to_smtp(test_settings):
    test_settings.EMAIL_RELAY_URL = "https://relay.example.com/send"
    test_settings.EMAIL_RELAY_API_KEY = "key"

    with patch.object(email_service.requests, "post", side_effect=requests.exceptions.Timeout()) as mock_post, \
            patch.object(email_service.smtplib, "SMTP") as mock_smtp:
        send_email(test_settings, "dana@reyesroofing.ca", "Hi", "<p>Hi</p>")

    assert mock_post.call_args.kwargs["timeout"] == test_settings.MAIL_TIMEOUT
    server = mock_smtp.return_value.__enter__.return_value
    server.sendmail.assert_called_once()
    assert server.sendmail.call_args.args[1] == "dana@reyesroofing.ca"


def test_smtp_error_raises_transport_error(test_settings):
    server = MagicMock()
    server.sendmail.side_effect = OSError("connection reset")

    with patch.object(email_service.smtplib, "SMTP") as mock_smtp:
        mock_smtp.return_value.__enter__.return_value = server
        with pytest.raises(EmailTransportError):
            send_email(test_settings, "dana@reyesroofing.ca", "Hi", "<p>Hi</p>")


@pytest.mark.asyncio
async def test_render_failure_returns_false(db, test_settings):
    with patch.object(notifier_module, "render_template", side_effect=TemplateError("bad template")), \
            patch.object(notifier_module, "send_email") as mock_send:
        sent = await EmailNotifier(test_settings).send_template(
            "dana@reyesroofing.ca", "weekly_report", {"businessName": "Reyes Roofing"}
        )

    assert sent is False
    mock_send.assert_not_called()
