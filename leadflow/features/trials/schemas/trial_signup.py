from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TrialSignupIn(BaseModel):
    """Free-trial form payload. The landing page posts camelCase keys."""

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    business_name: Optional[str] = Field(None, alias="businessName")
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None
    city: Optional[str] = None
    source: Optional[str] = None

    class Config:
        populate_by_name = True


class TrialSignupUpdate(BaseModel):
    status: Optional[str] = None
    notes: Optional[str] = None
    assigned_to: Optional[str] = None
    follow_up_date: Optional[datetime] = None


class TrialSignupOut(BaseModel):
    id: str
    first_name: str
    last_name: Optional[str] = None
    business_name: Optional[str] = None
    email: str
    phone: str
    industry: Optional[str] = None
    city: Optional[str] = None
    source: str
    status: str
    notes: Optional[str] = None
    assigned_to: Optional[str] = None
    follow_up_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
