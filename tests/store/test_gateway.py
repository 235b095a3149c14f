"""Tests for the record store gateway."""

import pytest

from dashboard.exceptions import (
    AccessDenied,
    ConstraintViolation,
    DuplicateKey,
    InvalidReference,
    MissingRequiredField,
    PostgrestError,
    RecordNotFound,
    RemoteError,
    Unauthenticated,
)
from dashboard.schemas.event import Event
from dashboard.store.gateway import RecordStoreGateway, classify_read_error, classify_write_error


@pytest.mark.parametrize("error, expected", [
    (PostgrestError("duplicate key", code="23505"), DuplicateKey),
    (PostgrestError("foreign key", code="23503"), InvalidReference),
    (PostgrestError("null value", code="23502"), MissingRequiredField),
    (PostgrestError("JWT expired", code="PGRST301"), AccessDenied),
    (PostgrestError("permission denied for table events", code="42501"), AccessDenied),
    (PostgrestError("new row violates row-level security policy"), AccessDenied),
    (PostgrestError("check failed", code="23514"), ConstraintViolation),
    (PostgrestError('new row violates check constraint "format_check"'), ConstraintViolation),
    (PostgrestError("no rows", code="PGRST116"), RecordNotFound),
    (PostgrestError("something else", code="XX000"), RemoteError),
])
def test_classify_write_error(error, expected):
    assert isinstance(classify_write_error("events", error), expected)


def test_classify_read_error():
    denied = classify_read_error("signups", PostgrestError("permission denied", code="42501"))
    assert isinstance(denied, AccessDenied)
    assert "signups" in str(denied)

    other = classify_read_error("signups", PostgrestError("boom", code="XX000"))
    assert isinstance(other, RemoteError)
    assert str(other) == "boom"
    assert other.code == "XX000"


@pytest.mark.asyncio
async def test_list_orders_newest_first(gateway, fake_store):
    fake_store.seed("events", [
        {"id": 1, "name": "Old", "created_at": "2026-01-01T00:00:00+00:00"},
        {"id": 2, "name": "New", "created_at": "2026-06-01T00:00:00+00:00"},
    ])

    events = await gateway.list("events", model=Event)

    assert [e.name for e in events] == ["New", "Old"]


@pytest.mark.asyncio
async def test_operations_require_session(fake_store):
    fake_store.session = None
    gateway = RecordStoreGateway(fake_store)

    with pytest.raises(Unauthenticated, match="Please log in again"):
        await gateway.list("events")
    with pytest.raises(Unauthenticated):
        await gateway.create("events", {"name": "x"})
    with pytest.raises(Unauthenticated):
        await gateway.update("events", 1, {"name": "x"})
    with pytest.raises(Unauthenticated):
        await gateway.count("link_clicks", raise_errors=True)

    assert await gateway.count("events") == 0
    assert await gateway.list_names("events") == []
    # Nothing reached the store
    assert fake_store.calls == []


@pytest.mark.asyncio
async def test_update_stamps_updated_at(gateway, fake_store):
    fake_store.seed("events", [{"id": 1, "name": "Talk"}])

    updated = await gateway.update("events", 1, {"name": "Keynote"})

    assert updated["name"] == "Keynote"
    assert "updated_at" in updated
    assert fake_store.count_calls("update", "events") == 1


@pytest.mark.asyncio
async def test_update_retries_without_updated_at(gateway, fake_store):
    fake_store.seed("hackathons", [{"id": 1, "name": "Hack"}])
    fake_store.tables_without_updated_at.add("hackathons")

    updated = await gateway.update("hackathons", 1, {"name": "HackWeek"})

    assert updated == {"id": 1, "name": "HackWeek"}
    assert fake_store.count_calls("update", "hackathons") == 2
    # Second attempt carries only the caller's fields
    assert fake_store.calls[-1][2] == {"name": "HackWeek"}


@pytest.mark.asyncio
async def test_update_does_not_retry_other_errors(gateway, fake_store):
    fake_store.seed("events", [{"id": 1, "name": "Talk"}])
    fake_store.fail("update", "events", PostgrestError("check failed", code="23514"))

    with pytest.raises(ConstraintViolation):
        await gateway.update("events", 1, {"format": "carrier pigeon"})

    assert fake_store.count_calls("update", "events") == 1


@pytest.mark.asyncio
async def test_update_missing_record(gateway):
    with pytest.raises(RecordNotFound):
        await gateway.update("events", 404, {"name": "Ghost"})


@pytest.mark.asyncio
async def test_delete_failure_is_remote_error(gateway, fake_store):
    fake_store.fail("delete", "events", PostgrestError("permission denied", code="42501"))

    with pytest.raises(RemoteError) as exc_info:
        await gateway.delete("events", 1)

    assert exc_info.value.code == "42501"


@pytest.mark.asyncio
async def test_count(gateway, fake_store):
    fake_store.seed("signups", [{"id": 1}, {"id": 2}, {"id": 3}])
    fake_store.fail("count", "events", PostgrestError("permission denied", code="42501"))

    assert await gateway.count("signups") == 3
    assert await gateway.count("events") == 0

    fake_store.fail("count", "events", PostgrestError("permission denied", code="42501"))
    with pytest.raises(AccessDenied):
        await gateway.count("events", raise_errors=True)


@pytest.mark.asyncio
async def test_find_one(gateway, fake_store):
    fake_store.seed("scholarship_benefits", [{"id": 4, "scholarship_id": 9, "amount": 100}])

    assert (await gateway.find_one("scholarship_benefits", scholarship_id=9))["id"] == 4
    assert await gateway.find_one("scholarship_benefits", scholarship_id=10) is None


@pytest.mark.asyncio
async def test_list_names(gateway, fake_store):
    fake_store.seed("scholarships", [{"id": 1, "title": "Bursary"}])

    names = await gateway.list_names("scholarships", label_column="title")

    assert [(n.id, n.name) for n in names] == [("1", "Bursary")]

    fake_store.fail("select", "scholarships", PostgrestError("boom"))
    assert await gateway.list_names("scholarships", label_column="title") == []


@pytest.mark.asyncio
async def test_list_first_available(gateway, fake_store):
    fake_store.missing_tables.add("a")
    fake_store.seed("b", [{"id": 1}])

    assert await gateway.list_first_available(["a", "b"]) == [{"id": 1}]

    fake_store.missing_tables.add("b")
    with pytest.raises(RemoteError) as exc_info:
        await gateway.list_first_available(["a", "b"])
    assert exc_info.value.code == "42P01"


@pytest.mark.asyncio
async def test_list_first_available_stops_on_unauthenticated(fake_store):
    fake_store.session = None
    with pytest.raises(Unauthenticated):
        await RecordStoreGateway(fake_store).list_first_available(["a", "b"])


@pytest.mark.asyncio
async def test_unexpected_shape_is_remote_error(gateway, fake_store):
    fake_store.seed("events", [{"name": "no id"}])

    with pytest.raises(RemoteError, match="Unexpected record shape"):
        await gateway.list("events", model=Event)


@pytest.mark.asyncio
async def test_list_first_available_reports_first_real_failure(gateway, fake_store):
    fake_store.fail("select", "a", PostgrestError("permission denied for table a", code="42501"))
    fake_store.missing_tables.add("b")

    with pytest.raises(AccessDenied):
        await gateway.list_first_available(["a", "b"])
