"""
Event-like record schemas for the admin dashboard.

Events, hackathons and partner events all live in flat tables of the hosted
store. Response models are lenient (every column optional, unknown columns
kept) so a remote schema change degrades instead of breaking the dashboard;
create models only insist on the fields the admin forms mark as required.
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Union
from datetime import datetime

RecordId = Union[int, str]

# =====================================================================
# Events
# =====================================================================

class EventFields(BaseModel):
    """Columns shared by every event operation."""
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    start_time: Optional[str] = Field(None, description="Zero-padded HH:MM, empty when the event is untimed")
    location: Optional[str] = None
    organisers: Optional[str] = None
    format: Optional[str] = Field(None, description="Free-form format tag, e.g. 'in-person' or 'online'")
    link: Optional[str] = None

    # Promotion flags
    linkedin_posted: Optional[bool] = None
    whatsapp_posted: Optional[bool] = None
    newsletter_posted: Optional[bool] = None
    is_highlighted: Optional[bool] = None

    model_config = ConfigDict(extra="allow")

class EventCreate(EventFields):
    """Schema for creating an event."""
    name: str = Field(..., min_length=1)
    linkedin_posted: bool = False
    whatsapp_posted: bool = False
    newsletter_posted: bool = False
    is_highlighted: bool = False

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "name": "Intro to Rust Workshop",
                "start_date": "2026-11-04T18:00:00Z",
                "start_time": "18:00",
                "location": "Room 2.14",
                "organisers": "Systems Society",
                "format": "in-person",
                "link": "https://example.org/rust",
            }
        },
    )

class EventUpdate(EventFields):
    """
    Schema for updating an event.

    All fields are optional; only the fields that were actually sent are
    written (see ``model_dump(exclude_unset=True)`` in the routers).
    """
    pass

class HighlightUpdate(BaseModel):
    """Body of the highlight toggle."""
    is_highlighted: bool

class Event(EventFields):
    """Event as stored remotely."""
    id: RecordId
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# =====================================================================
# Hackathons
# =====================================================================

class HackathonFields(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    organisers: Optional[str] = None
    format: Optional[str] = None
    link: Optional[str] = None

    model_config = ConfigDict(extra="allow")

class HackathonCreate(HackathonFields):
    name: str = Field(..., min_length=1)

class HackathonUpdate(HackathonFields):
    pass

class Hackathon(HackathonFields):
    id: RecordId
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# =====================================================================
# Partner events
# =====================================================================

class PartnerEventFields(BaseModel):
    """
    Partner events carry their date as free text ("Early March", "TBC").

    The value is never parsed; sorting and filtering treat it as opaque.
    """
    name: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    organiser: Optional[str] = None

    model_config = ConfigDict(extra="allow")

class PartnerEventCreate(PartnerEventFields):
    name: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)

class PartnerEventUpdate(PartnerEventFields):
    pass

class PartnerEvent(PartnerEventFields):
    id: RecordId
    created_at: Optional[datetime] = None
