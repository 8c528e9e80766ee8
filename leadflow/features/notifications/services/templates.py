import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape

template_dir = Path(__file__).resolve().parent.parent / "template"

env = Environment(
    loader=FileSystemLoader(str(template_dir)),
    autoescape=select_autoescape(["html"]),
)


class EmailTemplate(str, Enum):
    TRIAL_WELCOME = "trial_welcome"
    NEW_LEAD_NOTIFICATION = "new_lead_notification"
    INTERNAL_NOTIFICATION = "internal_notification"
    WEEKLY_REPORT = "weekly_report"


class UnknownTemplateError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Unknown email template: {name!r}")
        self.name = name


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


SUBJECTS = {
    EmailTemplate.TRIAL_WELCOME: "Welcome to LeadFlow24, {firstName}! Your trial starts now.",
    EmailTemplate.NEW_LEAD_NOTIFICATION: "🔔 New Lead: {leadName} needs {serviceNeeded}",
    EmailTemplate.INTERNAL_NOTIFICATION: "[LeadFlow24] {type}: {summary}",
    EmailTemplate.WEEKLY_REPORT: "📊 Your Weekly Lead Report — {businessName}",
}


class _Blank(dict):
    def __missing__(self, key):
        return ""


def _context(template: EmailTemplate, data: Mapping[str, Any]) -> dict:
    context = dict(data)
    if template is EmailTemplate.INTERNAL_NOTIFICATION:
        context.setdefault("type", "Notification")
        context.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
        context["details_json"] = json.dumps(data.get("details"), indent=2, default=str)
    return context


def render_template(name: EmailTemplate | str, data: Mapping[str, Any]) -> RenderedEmail:
    """Render one of the fixed email templates. Unknown names raise UnknownTemplateError."""
    try:
        template = EmailTemplate(name)
    except ValueError:
        raise UnknownTemplateError(str(name)) from None

    context = _context(template, data)
    subject = SUBJECTS[template].format_map(_Blank({k: "" if v is None else v for k, v in context.items()}))
    html = env.get_template(f"{template.value}.html").render(**context)
    return RenderedEmail(subject=subject, html=html)
