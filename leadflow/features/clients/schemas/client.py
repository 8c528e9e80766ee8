from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


class ClientCreate(BaseModel):
    trial_id: Optional[str] = None
    business_name: str
    contact_name: str
    email: EmailStr
    phone: str
    industry: str
    city: str
    service_area: Optional[str] = None
    services_offered: Optional[str] = None
    avg_job_value: Optional[float] = None
    plan: Optional[str] = None
    plan_price: Optional[float] = None


class ClientUpdate(BaseModel):
    business_name: Optional[str] = None
    contact_name: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None
    city: Optional[str] = None
    service_area: Optional[str] = None
    services_offered: Optional[str] = None
    avg_job_value: Optional[float] = None
    plan: Optional[str] = None
    plan_price: Optional[float] = None
    status: Optional[str] = None


class ClientOut(BaseModel):
    id: str
    trial_id: Optional[str] = None
    business_name: str
    contact_name: str
    email: str
    phone: str
    industry: str
    city: str
    service_area: Optional[str] = None
    services_offered: Optional[str] = None
    avg_job_value: Optional[float] = None
    plan: str
    plan_price: float
    status: str
    dashboard_token: str
    whop_membership_id: Optional[str] = None
    whop_user_id: Optional[str] = None
    onboarded_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
