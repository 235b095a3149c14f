"""
Schema definitions for the admin dashboard.

Every collection of the hosted store has an explicit model here; the gateway
validates remote rows against them instead of passing raw dicts around.
"""

from .event import (
    RecordId,
    EventFields, EventCreate, EventUpdate, HighlightUpdate, Event,
    HackathonFields, HackathonCreate, HackathonUpdate, Hackathon,
    PartnerEventFields, PartnerEventCreate, PartnerEventUpdate, PartnerEvent,
)
from .scholarship import (
    EligibilityFields, BenefitsFields, ScholarshipEligibility, ScholarshipBenefits,
    ScholarshipFields, ScholarshipCreate, ScholarshipUpdate, Scholarship,
)
from .composite import CompositeStatus, CompositeWriteResult
from .signup import Signup, DashboardStats
from .link_tracking import (
    ClicksByPlatform, ClicksByItem, ItemName,
    PlatformTotal, CategoryTotal, ItemClickGroup, PlatformColumn, LinkTrackingSummary,
)
from .views import ViewMode, SortOrder, EventFilterCriteria, EventDayGroup, EventListView

__all__ = [
    'RecordId',
    # Events
    'EventFields', 'EventCreate', 'EventUpdate', 'HighlightUpdate', 'Event',
    'HackathonFields', 'HackathonCreate', 'HackathonUpdate', 'Hackathon',
    'PartnerEventFields', 'PartnerEventCreate', 'PartnerEventUpdate', 'PartnerEvent',
    # Scholarships
    'EligibilityFields', 'BenefitsFields', 'ScholarshipEligibility', 'ScholarshipBenefits',
    'ScholarshipFields', 'ScholarshipCreate', 'ScholarshipUpdate', 'Scholarship',
    'CompositeStatus', 'CompositeWriteResult',
    # Signups
    'Signup', 'DashboardStats',
    # Link tracking
    'ClicksByPlatform', 'ClicksByItem', 'ItemName',
    'PlatformTotal', 'CategoryTotal', 'ItemClickGroup', 'PlatformColumn', 'LinkTrackingSummary',
    # Views
    'ViewMode', 'SortOrder', 'EventFilterCriteria', 'EventDayGroup', 'EventListView',
]
