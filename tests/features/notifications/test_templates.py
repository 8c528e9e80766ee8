import pytest

from leadflow.features.notifications.services.templates import (
    EmailTemplate,
    UnknownTemplateError,
    render_template,
)


def test_trial_welcome():
    email = render_template("trial_welcome", {"firstName": "Dana"})
    assert email.subject == "Welcome to LeadFlow24, Dana! Your trial starts now."
    assert "Dana" in email.html


def test_new_lead_notification_escapes_lead_input():
    email = render_template(
        EmailTemplate.NEW_LEAD_NOTIFICATION,
        {
            "leadName": "<script>alert(1)</script>",
            "phone": "780-555-0142",
            "serviceNeeded": "Furnace repair",
            "city": "Edmonton",
            "message": "No heat",
        },
    )
    assert email.subject == "🔔 New Lead: <script>alert(1)</script> needs Furnace repair"
    assert "<script>alert(1)</script>" not in email.html
    assert "&lt;script&gt;" in email.html
    assert "780-555-0142" in email.html


def test_internal_notification_renders_details():
    email = render_template(
        EmailTemplate.INTERNAL_NOTIFICATION,
        {"type": "New Lead", "summary": "Jordan — 555", "details": {"phone": "555-0142"}},
    )
    assert email.subject == "[LeadFlow24] New Lead: Jordan — 555"
    assert "[NEW LEAD]" in email.html
    assert "555-0142" in email.html


def test_weekly_report():
    email = render_template(
        "weekly_report",
        {
            "businessName": "Reyes Roofing",
            "contactName": "Dana",
            "leadsThisWeek": 7,
            "jobsBooked": 2,
            "revenue": 3600,
            "dashboardUrl": "https://leadflow24.com/dashboard?token=abc",
        },
    )
    assert email.subject == "📊 Your Weekly Lead Report — Reyes Roofing"
    assert "$3600" in email.html
    assert "https://leadflow24.com/dashboard?token=abc" in email.html


def test_missing_fields_render_blank():
    email = render_template("new_lead_notification", {})
    assert email.subject == "🔔 New Lead:  needs "


def test_unknown_template():
    with pytest.raises(UnknownTemplateError):
        render_template("password_reset", {})
