from fastapi import APIRouter

from dashboard.api.v1 import events, hackathons, scholarships, partner_events, signups, link_tracking

# Initialize API router
api_router = APIRouter()

# Every collection gets its own router; all of them sit behind the admin gate
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(hackathons.router, prefix="/hackathons", tags=["Hackathons"])
api_router.include_router(scholarships.router, prefix="/scholarships", tags=["Scholarships"])
api_router.include_router(partner_events.router, prefix="/partner-events", tags=["Partner Events"])
api_router.include_router(signups.router, prefix="/signups", tags=["Signups"])
api_router.include_router(signups.stats_router, prefix="/stats", tags=["Dashboard"])
api_router.include_router(link_tracking.router, prefix="/link-tracking", tags=["Link Tracking"])
