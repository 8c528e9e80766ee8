from enum import Enum

from sqlalchemy import Column, String

from leadflow.platform.db.base import LogModel


class EmailStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


class EmailLog(LogModel):
    """One row per outbound send attempt, whatever the outcome."""

    __tablename__ = "email_log"

    recipient = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    template = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default=EmailStatus.SENT.value, server_default="sent")
