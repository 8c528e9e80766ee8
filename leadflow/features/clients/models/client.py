import uuid
from enum import Enum

from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text

from leadflow.platform.db.base import BaseModel


class ClientStatus(str, Enum):
    ACTIVE = "active"
    CHURNED = "churned"


def generate_dashboard_token() -> str:
    """24 URL-safe characters sliced from a random UUID."""
    return uuid.uuid4().hex[:24]


class Client(BaseModel):
    """
    A paying business. Usually converted from a TrialSignup (trial_id), sometimes created directly.
    The dashboard_token is the only credential needed to read the client's lead dashboard.
    """

    __tablename__ = "clients"

    trial_id = Column(String, ForeignKey("trial_signups.id", ondelete="SET NULL"), nullable=True)
    business_name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(50), nullable=False)
    industry = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)
    service_area = Column(Text, nullable=True)
    services_offered = Column(Text, nullable=True)
    avg_job_value = Column(Float, nullable=True)
    plan = Column(String(50), nullable=False, default="starter", server_default="starter")
    plan_price = Column(Float, nullable=False, default=397, server_default="397")
    status = Column(String(50), nullable=False, default=ClientStatus.ACTIVE.value, server_default="active")
    dashboard_token = Column(String(64), unique=True, nullable=False, index=True, default=generate_dashboard_token)

    # Whop billing linkage
    whop_membership_id = Column(String(100), nullable=True)
    whop_user_id = Column(String(100), nullable=True)

    onboarded_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Client(business_name='{self.business_name}', status='{self.status}')>"
