"""
Partner events.

The table exists as ``partner_events`` in some projects and as
``partner events`` in others. Reads try each name in turn; writes fall back
to the next name only when the backend reports the table itself is missing,
so a real write error on the right table is never retried elsewhere.
"""

from typing import Any, Awaitable, Callable, List, TypeVar

from dashboard.exceptions import RemoteError
from dashboard.schemas.event import PartnerEvent, PartnerEventCreate, PartnerEventUpdate
from dashboard.store.gateway import RecordStoreGateway, is_missing_table
from dashboard.logging_config import get_logger

logger = get_logger("crud.partner_event")

PARTNER_EVENT_COLLECTIONS = ("partner_events", "partner events")

T = TypeVar("T")


async def _on_first_existing(write: Callable[[str], Awaitable[T]]) -> T:
    last_error: Exception = RemoteError("No partner events table configured")
    for collection in PARTNER_EVENT_COLLECTIONS:
        try:
            return await write(collection)
        except RemoteError as e:
            if not is_missing_table(e):
                raise
            logger.warning(f"Table {collection!r} not found, trying next name")
            last_error = e
    raise last_error


async def get_partner_events(gateway: RecordStoreGateway) -> List[PartnerEvent]:
    return await gateway.list_first_available(PARTNER_EVENT_COLLECTIONS, model=PartnerEvent)


async def create_partner_event(gateway: RecordStoreGateway, event: PartnerEventCreate) -> PartnerEvent:
    payload = event.model_dump(mode="json", exclude_none=True)
    return await _on_first_existing(
        lambda collection: gateway.create(collection, payload, model=PartnerEvent)
    )


async def update_partner_event(
    gateway: RecordStoreGateway, event_id: Any, event: PartnerEventUpdate
) -> PartnerEvent:
    payload = event.model_dump(mode="json", exclude_unset=True)
    return await _on_first_existing(
        lambda collection: gateway.update(collection, event_id, payload, model=PartnerEvent)
    )


async def delete_partner_event(gateway: RecordStoreGateway, event_id: Any) -> None:
    await _on_first_existing(lambda collection: gateway.delete(collection, event_id))
