"""Projections of the event list for the grid, table and timeline views."""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .event import Event


class ViewMode(str, Enum):
    """Presentation modes of the events page."""
    GRID = "grid"
    TABLE = "table"
    TIMELINE = "timeline"

class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class EventFilterCriteria(BaseModel):
    """
    Filters applied to the event list, in this order: search, past events,
    then the "not yet" flag filters.

    Each ``not_*`` filter keeps only events whose flag is false, so admins can
    list what still has to be highlighted or posted.
    """
    search: Optional[str] = None
    hide_past: bool = False
    not_highlighted: bool = False
    not_linkedin_posted: bool = False
    not_whatsapp_posted: bool = False
    not_newsletter_posted: bool = False


class EventDayGroup(BaseModel):
    day: Optional[date] = Field(None, description="Calendar day; None for the undated bucket")
    label: str
    day_of_week: Optional[str] = None
    events: List[Event]

class EventListView(BaseModel):
    mode: ViewMode
    order: SortOrder
    total: int
    events: List[Event]
    groups: Optional[List[EventDayGroup]] = None
