"""
Record Store Gateway.

Thin layer over ``StoreClient`` that enforces the session requirement, orders
listings, stamps ``updated_at`` on updates and turns raw backend failures into
the semantic errors of ``dashboard.exceptions``. No local cache is kept:
callers re-list after a mutation.
"""

from typing import Any, Dict, List, Optional, Sequence, Type

from pydantic import BaseModel, ValidationError

from dashboard.exceptions import (
    AccessDenied,
    ConstraintViolation,
    DuplicateKey,
    InvalidReference,
    MissingRequiredField,
    PostgrestError,
    RecordNotFound,
    RemoteError,
    StoreError,
    Unauthenticated,
)
from dashboard.logging_config import get_logger
from dashboard.schemas.link_tracking import ItemName
from dashboard.time_utils import utc_now_iso

logger = get_logger("store.gateway")

NOT_AUTHENTICATED = "Not authenticated. Please log in again."

# undefined_table / relation missing from the schema cache
MISSING_TABLE_CODES = {"42P01", "PGRST205"}


def _is_access_denied(error: PostgrestError) -> bool:
    message = (error.message or "").lower()
    return (
        error.code in ("PGRST301", "42501")
        or "permission denied" in message
        or "policy" in message
    )


def is_missing_table(error: Exception) -> bool:
    return isinstance(error, RemoteError) and error.code in MISSING_TABLE_CODES


def _is_missing_timestamp_column(error: PostgrestError) -> bool:
    return error.code == "42703" or "updated_at" in (error.message or "")


def classify_read_error(collection: str, error: PostgrestError) -> StoreError:
    if _is_access_denied(error):
        return AccessDenied(
            f"Access denied to {collection}. Please check Row Level Security (RLS) policies. "
            "The authenticated user needs SELECT permission."
        )
    return RemoteError(error.message, code=error.code)


def classify_write_error(collection: str, error: PostgrestError) -> StoreError:
    """
    Map a failed insert or update to a user-facing error kind.

    Args:
        collection: Table the write targeted
        error: Raw failure from the store client

    Returns:
        The StoreError to raise
    """
    message = error.message or ""
    if error.code == "PGRST116":
        return RecordNotFound("Record not found. It may have been deleted.")
    if error.code == "23505":
        return DuplicateKey("A record with this information already exists.")
    if error.code == "23503":
        return InvalidReference("Invalid reference. Please check related data.")
    if error.code == "23502":
        return MissingRequiredField("Required field is missing. Please fill in all required fields.")
    if _is_access_denied(error):
        return AccessDenied("Access denied. Please check Row Level Security (RLS) policies.")
    if error.code == "23514" or "violates check constraint" in message:
        return ConstraintViolation(
            "Invalid value provided. Please check your input (e.g., status, format, category)."
        )
    return RemoteError(message or f"Failed to write record in {collection}", code=error.code)


class RecordStoreGateway:
    """Read, write and delete records of named remote collections."""

    def __init__(self, client):
        self.client = client

    def _require_session(self) -> None:
        if self.client.session is None:
            raise Unauthenticated(NOT_AUTHENTICATED)

    @staticmethod
    def _validate(collection: str, rows: List[Dict[str, Any]], model: Optional[Type[BaseModel]]):
        if model is None:
            return rows
        try:
            return [model.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Unexpected record shape from {collection}: {str(e)}")
            raise RemoteError(f"Unexpected record shape returned by {collection}")

    async def list(
        self,
        collection: str,
        columns: str = "*",
        model: Optional[Type[BaseModel]] = None,
    ) -> List[Any]:
        """
        List every record of a collection, newest first.

        Args:
            collection: Remote table or view name
            columns: PostgREST select expression (embeds allowed)
            model: Optional schema every row is validated against

        Returns:
            Rows as dicts, or model instances when ``model`` is given

        Raises:
            Unauthenticated: If there is no active session
            AccessDenied: If row level security denies the read
            RemoteError: For any other failure
        """
        self._require_session()
        try:
            rows = await self.client.select(
                collection, columns=columns, order="created_at", ascending=False
            )
        except PostgrestError as e:
            logger.error(f"Error fetching {collection}: {e!r}")
            raise classify_read_error(collection, e)
        return self._validate(collection, rows or [], model)

    async def create(
        self,
        collection: str,
        fields: Dict[str, Any],
        model: Optional[Type[BaseModel]] = None,
    ) -> Any:
        """Insert one record and return it as stored."""
        self._require_session()
        try:
            row = await self.client.insert(collection, fields)
        except PostgrestError as e:
            logger.error(f"Error creating record in {collection}: {e!r}")
            raise classify_write_error(collection, e)
        logger.info(f"Created record in {collection}: {row.get('id')}")
        return self._validate(collection, [row], model)[0]

    async def update(
        self,
        collection: str,
        record_id: Any,
        fields: Dict[str, Any],
        model: Optional[Type[BaseModel]] = None,
    ) -> Any:
        """
        Update one record by id, stamping ``updated_at``.

        Tables without an ``updated_at`` column reject the stamped write; the
        write is then repeated without it and the caller never sees the first
        failure.
        """
        self._require_session()
        match = {"id": record_id}
        try:
            try:
                row = await self.client.update(
                    collection, {**fields, "updated_at": utc_now_iso()}, match
                )
            except PostgrestError as e:
                if not _is_missing_timestamp_column(e):
                    raise
                logger.debug(f"{collection} has no updated_at column, retrying without it")
                row = await self.client.update(collection, dict(fields), match)
        except PostgrestError as e:
            logger.error(f"Error updating record {record_id} in {collection}: {e!r}")
            raise classify_write_error(collection, e)
        logger.info(f"Updated record in {collection}: {record_id}")
        return self._validate(collection, [row], model)[0]

    async def delete(self, collection: str, record_id: Any) -> None:
        try:
            await self.client.delete(collection, {"id": record_id})
        except PostgrestError as e:
            logger.error(f"Error deleting record {record_id} from {collection}: {e!r}")
            raise RemoteError(e.message, code=e.code)
        logger.info(f"Deleted record from {collection}: {record_id}")

    async def list_view(
        self,
        view: str,
        model: Optional[Type[BaseModel]] = None,
    ) -> List[Any]:
        """List a derived view as-is; aggregated views have no creation time to order on."""
        self._require_session()
        try:
            rows = await self.client.select(view)
        except PostgrestError as e:
            logger.error(f"Error fetching {view}: {e!r}")
            raise classify_read_error(view, e)
        return self._validate(view, rows or [], model)

    async def count(self, collection: str, raise_errors: bool = False) -> int:
        """
        Exact row count.

        By default a missing session or a failure yields 0 so dashboard tiles
        keep rendering; ``raise_errors`` makes both raise like ``list``.
        """
        if self.client.session is None:
            if raise_errors:
                raise Unauthenticated(NOT_AUTHENTICATED)
            logger.warning(f"No session for {collection} count")
            return 0
        try:
            return await self.client.count(collection)
        except PostgrestError as e:
            logger.error(f"Error counting {collection}: {e!r}")
            if raise_errors:
                raise classify_read_error(collection, e)
            return 0

    async def find_one(self, collection: str, **match: Any) -> Optional[Dict[str, Any]]:
        """Return the first record matching every equality filter, or None."""
        self._require_session()
        try:
            rows = await self.client.select(collection, filters=match, limit=1)
        except PostgrestError as e:
            logger.error(f"Error probing {collection} with {match}: {e!r}")
            raise classify_read_error(collection, e)
        return rows[0] if rows else None

    async def list_names(self, collection: str, label_column: str = "name") -> List[ItemName]:
        """Lightweight id/label pairs for display; empty on any failure."""
        if self.client.session is None:
            return []
        try:
            rows = await self.client.select(collection, columns=f"id,{label_column}")
        except PostgrestError as e:
            logger.error(f"Error fetching {collection} names: {e!r}")
            return []
        return [ItemName(id=row["id"], name=row.get(label_column)) for row in rows if "id" in row]

    async def list_first_available(
        self,
        collections: Sequence[str],
        model: Optional[Type[BaseModel]] = None,
    ) -> List[Any]:
        """
        List the first collection name that works.

        Used where a table exists under more than one name. Any store failure
        on one name falls through to the next. The first failure that is not a
        missing table is the one raised; if every name is missing, the last.
        """
        first_real_error: Optional[StoreError] = None
        last_error: Optional[StoreError] = None
        for collection in collections:
            try:
                return await self.list(collection, model=model)
            except Unauthenticated:
                raise
            except StoreError as e:
                logger.warning(f"Listing {collection} failed ({str(e)}), trying next name")
                last_error = e
                if first_real_error is None and not is_missing_table(e):
                    first_real_error = e
        if last_error is None:
            raise ValueError("No collection names given")
        raise first_real_error or last_error
