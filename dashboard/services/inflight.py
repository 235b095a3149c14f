"""Guard against duplicate submissions for the same record."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Hashable, Set, Tuple

from dashboard.exceptions import OperationInProgress

logger = logging.getLogger(__name__)


class InFlightGuard:
    """
    Tracks mutations that are awaiting the remote store.

    A second mutation of the same (collection, id) while the first is still
    pending is rejected instead of queued. Single event loop only.
    """

    def __init__(self):
        self._pending: Set[Tuple[str, Hashable]] = set()

    def is_pending(self, collection: str, record_id: Any) -> bool:
        return (collection, str(record_id)) in self._pending

    @asynccontextmanager
    async def hold(self, collection: str, record_id: Any):
        key = (collection, str(record_id))
        if key in self._pending:
            logger.warning(f"Rejected duplicate mutation of {collection} {record_id}")
            raise OperationInProgress(
                f"Another change to this {collection} record is still being saved."
            )
        self._pending.add(key)
        try:
            yield
        finally:
            self._pending.discard(key)
