from fastapi import APIRouter, Depends, HTTPException
from typing import List

from dashboard.api.deps import get_gateway, get_inflight_guard, http_error
from dashboard.crud.signup import delete_signup, get_dashboard_stats, get_signups
from dashboard.exceptions import StoreError
from dashboard.logging_config import get_logger
from dashboard.schemas.signup import DashboardStats, Signup
from dashboard.services.inflight import InFlightGuard
from dashboard.store.gateway import RecordStoreGateway

router = APIRouter()
stats_router = APIRouter()
logger = get_logger("api.signups")


@router.get("/", response_model=List[Signup])
async def read_signups(gateway: RecordStoreGateway = Depends(get_gateway)):
    try:
        return await get_signups(gateway)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error retrieving signups: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{signup_id}", status_code=204)
async def delete_signup_by_id(
    signup_id: str,
    gateway: RecordStoreGateway = Depends(get_gateway),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    try:
        async with guard.hold("signups", signup_id):
            await delete_signup(gateway, signup_id)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error deleting signup {signup_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@stats_router.get("/", response_model=DashboardStats)
async def read_dashboard_stats(gateway: RecordStoreGateway = Depends(get_gateway)):
    """
    Record counts for the dashboard home tiles. Never fails on a single count.
    """
    return await get_dashboard_stats(gateway)
