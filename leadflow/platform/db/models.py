"""Registry of every mapped model, imported for create_all and alembic autogenerate."""
from leadflow.features.capture_pages.models.capture_page import CapturePage
from leadflow.features.clients.models.client import Client
from leadflow.features.leads.models.lead import Lead, LeadActivity
from leadflow.features.notifications.models.email_log import EmailLog
from leadflow.features.subscribers.models.subscriber import Subscriber
from leadflow.features.trials.models.trial_signup import TrialSignup

__all__ = [
    "CapturePage",
    "Client",
    "EmailLog",
    "Lead",
    "LeadActivity",
    "Subscriber",
    "TrialSignup",
]
