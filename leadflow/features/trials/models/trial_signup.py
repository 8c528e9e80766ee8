from enum import Enum

from sqlalchemy import Column, DateTime, String, Text

from leadflow.platform.db.base import BaseModel


class TrialStatus(str, Enum):
    NEW = "new"
    ACTIVE = "active"
    CONVERTED = "converted"


class TrialSignup(BaseModel):
    __tablename__ = "trial_signups"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=True)
    business_name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(50), nullable=False)
    industry = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    source = Column(String(100), nullable=False, default="free_trial_page", server_default="free_trial_page")
    # Operators may set any other value; these three are the ones the code reads
    status = Column(String(50), nullable=False, default=TrialStatus.NEW.value, server_default="new", index=True)
    notes = Column(Text, nullable=True)
    assigned_to = Column(String(255), nullable=True)
    follow_up_date = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<TrialSignup(email='{self.email}', status='{self.status}')>"
