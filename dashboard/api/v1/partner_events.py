from fastapi import APIRouter, Depends, HTTPException
from typing import List

from dashboard.api.deps import get_gateway, get_inflight_guard, http_error
from dashboard.crud.partner_event import (
    create_partner_event,
    delete_partner_event,
    get_partner_events,
    update_partner_event,
)
from dashboard.exceptions import StoreError
from dashboard.logging_config import get_logger
from dashboard.schemas.event import PartnerEvent, PartnerEventCreate, PartnerEventUpdate
from dashboard.services.inflight import InFlightGuard
from dashboard.store.gateway import RecordStoreGateway

router = APIRouter()
logger = get_logger("api.partner_events")


@router.get("/", response_model=List[PartnerEvent])
async def read_partner_events(gateway: RecordStoreGateway = Depends(get_gateway)):
    try:
        return await get_partner_events(gateway)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error retrieving partner events: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/", response_model=PartnerEvent, status_code=201)
async def create_new_partner_event(
    event: PartnerEventCreate, gateway: RecordStoreGateway = Depends(get_gateway)
):
    try:
        return await create_partner_event(gateway, event)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error creating partner event: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/{event_id}", response_model=PartnerEvent)
async def update_partner_event_details(
    event_id: str,
    event: PartnerEventUpdate,
    gateway: RecordStoreGateway = Depends(get_gateway),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    try:
        async with guard.hold("partner_events", event_id):
            return await update_partner_event(gateway, event_id, event)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error updating partner event {event_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{event_id}", status_code=204)
async def delete_partner_event_by_id(
    event_id: str,
    gateway: RecordStoreGateway = Depends(get_gateway),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    try:
        async with guard.hold("partner_events", event_id):
            await delete_partner_event(gateway, event_id)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error deleting partner event {event_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
