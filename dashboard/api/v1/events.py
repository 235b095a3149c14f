from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from dashboard.api.deps import get_gateway, get_inflight_guard, http_error
from dashboard.crud.event import (
    create_event,
    delete_event,
    get_events,
    set_event_highlight,
    update_event,
)
from dashboard.exceptions import StoreError
from dashboard.logging_config import get_logger
from dashboard.schemas.event import Event, EventCreate, EventUpdate, HighlightUpdate
from dashboard.schemas.views import EventFilterCriteria, EventListView, SortOrder, ViewMode
from dashboard.services.event_view import build_event_list_view
from dashboard.services.inflight import InFlightGuard
from dashboard.store.gateway import RecordStoreGateway

router = APIRouter()
logger = get_logger("api.events")


@router.get("/", response_model=EventListView)
async def read_events(
    search: Optional[str] = Query(None, description="Case-insensitive text in name, description, location or organisers"),
    hide_past: bool = Query(False, description="Drop events dated before today"),
    not_highlighted: bool = False,
    not_linkedin_posted: bool = False,
    not_whatsapp_posted: bool = False,
    not_newsletter_posted: bool = False,
    order: SortOrder = SortOrder.ASC,
    view: ViewMode = ViewMode.GRID,
    gateway: RecordStoreGateway = Depends(get_gateway),
):
    """
    Retrieve events filtered, sorted and shaped for one of the page views.
    """
    criteria = EventFilterCriteria(
        search=search,
        hide_past=hide_past,
        not_highlighted=not_highlighted,
        not_linkedin_posted=not_linkedin_posted,
        not_whatsapp_posted=not_whatsapp_posted,
        not_newsletter_posted=not_newsletter_posted,
    )
    try:
        events = await get_events(gateway)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error retrieving events: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
    return build_event_list_view(events, criteria, mode=view, order=order)


@router.post("/", response_model=Event, status_code=201)
async def create_new_event(
    event: EventCreate, gateway: RecordStoreGateway = Depends(get_gateway)
):
    """
    Create a new event.
    """
    try:
        return await create_event(gateway, event)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error creating event: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/{event_id}", response_model=Event)
async def update_event_details(
    event_id: str,
    event: EventUpdate,
    gateway: RecordStoreGateway = Depends(get_gateway),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    """
    Update an event.
    """
    try:
        async with guard.hold("events", event_id):
            return await update_event(gateway, event_id, event)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error updating event {event_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{event_id}/highlight", response_model=Event)
async def update_event_highlight(
    event_id: str,
    body: HighlightUpdate,
    gateway: RecordStoreGateway = Depends(get_gateway),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    """
    Highlight or un-highlight an event.
    """
    try:
        async with guard.hold("events", event_id):
            return await set_event_highlight(gateway, event_id, body.is_highlighted)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error highlighting event {event_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{event_id}", status_code=204)
async def delete_event_by_id(
    event_id: str,
    gateway: RecordStoreGateway = Depends(get_gateway),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    """
    Delete an event.
    """
    try:
        async with guard.hold("events", event_id):
            await delete_event(gateway, event_id)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error deleting event {event_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
