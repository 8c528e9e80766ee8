from enum import Enum

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Index, String, Text

from leadflow.platform.db.base import BaseModel, LogModel


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    BOOKED = "booked"
    NO_ANSWER = "no_answer"


class Lead(BaseModel):
    __tablename__ = "leads"

    # Nullable: a lead can arrive before (or without) any client association
    client_id = Column(String, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)
    capture_page = Column(String(255), nullable=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=False)
    service_needed = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    message = Column(Text, nullable=True)

    # Attribution
    source = Column(String(100), nullable=False, default="facebook", server_default="facebook")
    utm_source = Column(String(255), nullable=True)
    utm_medium = Column(String(255), nullable=True)
    utm_campaign = Column(String(255), nullable=True)

    status = Column(String(50), nullable=False, default=LeadStatus.NEW.value, server_default="new", index=True)
    contacted_at = Column(DateTime(timezone=True), nullable=True)
    booked_at = Column(DateTime(timezone=True), nullable=True)
    job_value = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    __table_args__ = (Index("ix_leads_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<Lead(name='{self.name}', status='{self.status}', client_id='{self.client_id}')>"


class LeadActivity(LogModel):
    """Audit trail for a lead. Rows are only ever inserted."""

    __tablename__ = "lead_activity"

    lead_id = Column(String, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, index=True)
    action = Column(String(50), nullable=False)
    details = Column(JSON, nullable=True)
    created_by = Column(String(255), nullable=True)
