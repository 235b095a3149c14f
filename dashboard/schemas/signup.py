from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .event import RecordId


class Signup(BaseModel):
    """A community signup. Read and delete only."""
    id: RecordId
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    referral: Optional[str] = None
    consent: Optional[bool] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(extra="allow")


class DashboardStats(BaseModel):
    events: int = 0
    hackathons: int = 0
    scholarships: int = 0
    signups: int = 0
