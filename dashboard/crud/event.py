from typing import Any, List

from dashboard.schemas.event import (
    Event,
    EventCreate,
    EventUpdate,
    Hackathon,
    HackathonCreate,
    HackathonUpdate,
)
from dashboard.store.gateway import RecordStoreGateway
from dashboard.logging_config import get_logger

logger = get_logger("crud.event")

EVENTS = "events"
HACKATHONS = "hackathons"


async def get_events(gateway: RecordStoreGateway) -> List[Event]:
    """
    Get every event, newest first.

    Args:
        gateway: Record store gateway for the current session

    Returns:
        List of events
    """
    return await gateway.list(EVENTS, model=Event)


async def create_event(gateway: RecordStoreGateway, event: EventCreate) -> Event:
    """
    Create a new event.

    Args:
        gateway: Record store gateway for the current session
        event: Event data

    Returns:
        Created event
    """
    created = await gateway.create(EVENTS, event.model_dump(mode="json", exclude_none=True), model=Event)
    logger.info(f"Created new event: {created.id} - {created.name}")
    return created


async def update_event(gateway: RecordStoreGateway, event_id: Any, event: EventUpdate) -> Event:
    """
    Update an existing event.

    Only fields present in the request are written.

    Args:
        gateway: Record store gateway for the current session
        event_id: ID of the event to update
        event: Updated event data

    Returns:
        Updated event
    """
    update_data = event.model_dump(mode="json", exclude_unset=True)
    return await gateway.update(EVENTS, event_id, update_data, model=Event)


async def set_event_highlight(gateway: RecordStoreGateway, event_id: Any, highlighted: bool) -> Event:
    """Toggle the highlight flag without touching any other column."""
    updated = await gateway.update(EVENTS, event_id, {"is_highlighted": highlighted}, model=Event)
    logger.info(f"Event {event_id} highlight set to {highlighted}")
    return updated


async def delete_event(gateway: RecordStoreGateway, event_id: Any) -> None:
    await gateway.delete(EVENTS, event_id)


async def get_hackathons(gateway: RecordStoreGateway) -> List[Hackathon]:
    return await gateway.list(HACKATHONS, model=Hackathon)


async def create_hackathon(gateway: RecordStoreGateway, hackathon: HackathonCreate) -> Hackathon:
    return await gateway.create(HACKATHONS, hackathon.model_dump(mode="json", exclude_none=True), model=Hackathon)


async def update_hackathon(
    gateway: RecordStoreGateway, hackathon_id: Any, hackathon: HackathonUpdate
) -> Hackathon:
    update_data = hackathon.model_dump(mode="json", exclude_unset=True)
    return await gateway.update(HACKATHONS, hackathon_id, update_data, model=Hackathon)


async def delete_hackathon(gateway: RecordStoreGateway, hackathon_id: Any) -> None:
    await gateway.delete(HACKATHONS, hackathon_id)
