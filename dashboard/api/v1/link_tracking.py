from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from dashboard.api.deps import get_gateway, http_error
from dashboard.exceptions import StoreError
from dashboard.logging_config import get_logger
from dashboard.schemas.link_tracking import LinkTrackingSummary
from dashboard.services.link_tracking import LinkTrackingService
from dashboard.store.gateway import RecordStoreGateway

router = APIRouter()
logger = get_logger("api.link_tracking")


@router.get("/", response_model=LinkTrackingSummary)
async def read_link_tracking(
    category: Optional[str] = Query(None, description="event, hackathon, scholarship or all"),
    platform: Optional[str] = Query(None, description="Only items with clicks from this platform, or all"),
    gateway: RecordStoreGateway = Depends(get_gateway),
):
    """
    Click analytics: totals per platform and category plus a per-item breakdown.
    """
    try:
        return await LinkTrackingService(gateway).load_summary(category=category, platform=platform)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error loading link tracking data: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
