from fastapi import APIRouter, Depends, HTTPException
from typing import List

from dashboard.api.deps import get_gateway, get_inflight_guard, http_error
from dashboard.crud.event import (
    create_hackathon,
    delete_hackathon,
    get_hackathons,
    update_hackathon,
)
from dashboard.exceptions import StoreError
from dashboard.logging_config import get_logger
from dashboard.schemas.event import Hackathon, HackathonCreate, HackathonUpdate
from dashboard.services.inflight import InFlightGuard
from dashboard.store.gateway import RecordStoreGateway

router = APIRouter()
logger = get_logger("api.hackathons")


@router.get("/", response_model=List[Hackathon])
async def read_hackathons(gateway: RecordStoreGateway = Depends(get_gateway)):
    try:
        return await get_hackathons(gateway)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error retrieving hackathons: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/", response_model=Hackathon, status_code=201)
async def create_new_hackathon(
    hackathon: HackathonCreate, gateway: RecordStoreGateway = Depends(get_gateway)
):
    try:
        return await create_hackathon(gateway, hackathon)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error creating hackathon: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/{hackathon_id}", response_model=Hackathon)
async def update_hackathon_details(
    hackathon_id: str,
    hackathon: HackathonUpdate,
    gateway: RecordStoreGateway = Depends(get_gateway),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    try:
        async with guard.hold("hackathons", hackathon_id):
            return await update_hackathon(gateway, hackathon_id, hackathon)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error updating hackathon {hackathon_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{hackathon_id}", status_code=204)
async def delete_hackathon_by_id(
    hackathon_id: str,
    gateway: RecordStoreGateway = Depends(get_gateway),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    try:
        async with guard.hold("hackathons", hackathon_id):
            await delete_hackathon(gateway, hackathon_id)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error deleting hackathon {hackathon_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
