from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class LeadCreate(BaseModel):
    # name and phone are required; the service checks them so the error names both
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    service_needed: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    message: Optional[str] = None
    source: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    capture_page: Optional[str] = None


class LeadUpdate(BaseModel):
    """Sparse update: only keys present in the request body are applied."""

    status: Optional[str] = None
    notes: Optional[str] = None
    job_value: Optional[float] = None
    contacted_at: Optional[datetime] = None
    booked_at: Optional[datetime] = None


class LeadOut(BaseModel):
    id: str
    client_id: Optional[str] = None
    capture_page: Optional[str] = None
    name: str
    email: Optional[str] = None
    phone: str
    service_needed: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    message: Optional[str] = None
    source: str
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    status: str
    contacted_at: Optional[datetime] = None
    booked_at: Optional[datetime] = None
    job_value: Optional[float] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LeadActivityOut(BaseModel):
    id: str
    lead_id: str
    action: str
    details: Optional[dict[str, Any]] = None
    created_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
