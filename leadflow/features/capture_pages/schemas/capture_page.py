from typing import Optional

from pydantic import BaseModel, Field


class CapturePageCreate(BaseModel):
    client_id: str
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
    title: str
    industry: Optional[str] = None
    city: Optional[str] = None

