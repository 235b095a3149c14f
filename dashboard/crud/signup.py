import asyncio
from typing import Any, List

from dashboard.schemas.signup import DashboardStats, Signup
from dashboard.store.gateway import RecordStoreGateway
from dashboard.logging_config import get_logger

logger = get_logger("crud.signup")

SIGNUPS = "signups"
COUNTED_COLLECTIONS = ("events", "hackathons", "scholarships", "signups")


async def get_signups(gateway: RecordStoreGateway) -> List[Signup]:
    signups = await gateway.list(SIGNUPS, model=Signup)
    if not signups:
        logger.warning("Signups table is empty or no data returned")
    return signups


async def delete_signup(gateway: RecordStoreGateway, signup_id: Any) -> None:
    await gateway.delete(SIGNUPS, signup_id)


async def get_dashboard_stats(gateway: RecordStoreGateway) -> DashboardStats:
    """
    Record counts for the dashboard tiles.

    A failing count shows as 0 rather than breaking the dashboard.
    """
    counts = await asyncio.gather(*(gateway.count(name) for name in COUNTED_COLLECTIONS))
    return DashboardStats(**dict(zip(COUNTED_COLLECTIONS, counts)))
