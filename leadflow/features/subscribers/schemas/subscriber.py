from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SubscribeIn(BaseModel):
    # Presence is checked by the route so a missing email answers "Email required"
    email: Optional[str] = None
    source: Optional[str] = None


class SubscriberOut(BaseModel):
    id: str
    email: str
    source: str
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
